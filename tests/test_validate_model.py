from prisoners_puzzle import config
from prisoners_puzzle.validate_model import main


def test_validation_script_small_run(capsys, monkeypatch):
    monkeypatch.setattr(config, "ENUMERATION_MAX_N", 4)
    monkeypatch.setattr(config, "VALIDATION_ITERATIONS", 50)
    monkeypatch.setattr(config, "VALIDATION_ITERATIONS_LARGE", 50)
    main()
    out = capsys.readouterr().out
    assert "N=4: " in out
    assert "N=5: " not in out.split("[VALIDATION] loop strategy, N=100")[0]
    assert "[VALIDATION COMPLETE]" in out
