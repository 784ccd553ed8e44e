from greedysched.main import main


class TestMain:
    def test_runs_simulation_and_prints_results(self, capsys):
        assert main(["4", "6", "--tick", "0", "--seed", "1"]) == 0

        out = capsys.readouterr().out
        assert "--- tick 0 | pending 6 ---" in out
        assert "=== Simulation Results ===" in out
        assert "Worker 4 |" in out

    def test_rejects_invalid_counts(self, capsys):
        assert main(["5", "4", "--tick", "0"]) == 2

        err = capsys.readouterr().err
        assert "task_count: Task count must be greater than worker count" in err
