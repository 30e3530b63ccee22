import pytest

from logistic_sgd.demo import main, run


def test_main_prints_summary_and_writes_plot(tmp_path, capsys):
    plot_path = tmp_path / "figures" / "loss.png"
    main(["--epochs", "3", "--plot", str(plot_path)])

    out = capsys.readouterr().out
    assert "fitted coefficients" in out
    assert "training accuracy" in out
    assert plot_path.is_file()


def test_run_with_random_init_and_tolerance():
    model = run(n_samples=50, learning_rate=0.05, epochs=30, tol=1e6, init="random", seed=1)
    assert len(model.history_) == 2


def test_invalid_learning_rate_exits_with_status_2():
    with pytest.raises(SystemExit) as excinfo:
        main(["--learning-rate", "0"])
    assert excinfo.value.code == 2


def test_default_run_is_within_one_of_true_coefficients(capsys):
    main([])
    out = capsys.readouterr().out
    line = next(l for l in out.splitlines() if l.startswith("max |fitted - true|"))
    assert float(line.split("=")[1]) <= 1.0
