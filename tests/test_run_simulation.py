import pytest

from prisoners_puzzle.run_simulation import main


def test_report_lines(capsys):
    assert main(["--prisoners", "10", "--iterations", "50", "--seed", "1"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Prisoner's dilemma 10 prisoners, 50 times"
    assert out[1] == "Prisoners: 10, Trials: 50"
    assert out[2].startswith("Success rate: ")
    assert out[2].endswith("%")
    pct = float(out[2][len("Success rate: ") : -1])
    assert 0.0 <= pct <= 100.0


def test_default_counts(capsys):
    assert main(["--strategy", "naive", "--iterations", "20", "--seed", "3"]) == 0
    out = capsys.readouterr().out
    assert "Prisoners: 100, Trials: 20" in out
    assert "Success rate: 0.0%" in out


def test_same_seed_same_output(capsys):
    main(["-p", "12", "-i", "200", "--seed", "42"])
    first = capsys.readouterr().out
    main(["-p", "12", "-i", "200", "--seed", "42"])
    assert capsys.readouterr().out == first


@pytest.mark.parametrize(
    "argv",
    [
        ["--prisoners", "0"],
        ["--iterations", "0"],
        ["--prisoners", "-4"],
        ["--prisoners", "abc"],
        ["--iterations", "1.5"],
        ["--strategy", "greedy"],
        ["--prisoners", "10", "--max-probes", "11"],
        ["--workers", "0", "--iterations", "5"],
        ["-p", "4", "-i", "10", "--seed", "-1"],
        ["--sweep", "--mode", "quick", "--seed", "-5000"],
        ["--sweep", "--prisoners", "10"],
        ["--sweep", "--iterations", "10"],
        ["--sweep", "--strategy", "loop"],
        ["--sweep", "--max-probes", "3"],
        ["--sweep", "--compare"],
        ["--compare", "--strategy", "naive"],
    ],
)
def test_invalid_arguments_exit_non_zero(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2
    assert capsys.readouterr().err


def test_compare_prints_both_strategies(capsys):
    assert main(["--compare", "-p", "6", "-i", "100", "--seed", "9"]) == 0
    out = capsys.readouterr().out
    assert "loop" in out
    assert "naive" in out
    assert "exact_pct" in out


def test_quick_sweep(capsys, monkeypatch):
    from prisoners_puzzle import config

    monkeypatch.setattr(config, "PRISONER_VALUES_QUICK", [2, 4])
    monkeypatch.setattr(config, "ITERATIONS_SWEEP_QUICK", 50)
    assert main(["--sweep", "--mode", "quick"]) == 0
    out = capsys.readouterr().out
    assert "mean_pct" in out
    assert "exact_pct" in out
