import pytest

from cli import build_parser, main
from factorization import Algorithm


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args(["12"])
        assert args.numbers == [12]
        assert args.alg is Algorithm.TRIAL_DIVISION
        assert not args.check
        assert args.jobs is None

    @pytest.mark.parametrize("name, expected", [
        ("brents_rho", Algorithm.BRENTS_RHO),
        ("Brent's Rho", Algorithm.BRENTS_RHO),
        ("FERMAT", Algorithm.FERMAT),
    ])
    def test_algorithm_names(self, name, expected):
        args = build_parser().parse_args(["12", "--alg", name])
        assert args.alg is expected

    def test_unknown_algorithm(self, capsys):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args(["12", "--alg", "quadratic"])
        assert exc.value.code == 2
        assert "unknown algorithm 'quadratic'" in capsys.readouterr().err

    def test_invalid_number(self, capsys):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["twelve"])
        assert "invalid integer" in capsys.readouterr().err

    def test_numbers_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestMain:

    def test_output(self, capsys):
        assert main(["12", "15", "--alg", "brents_rho", "--assert"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("12 => [2, 2, 3], took ")
        assert lines[0].endswith('with "Brent\'s Rho"')
        assert lines[1].startswith("15 => [3, 5], took ")

    def test_big_number(self, capsys):
        n = 1000000007 * 1000000009
        assert main([str(n), "--alg", "fermat"]) == 0
        assert f"{n} => [1000000007, 1000000009]" in capsys.readouterr().out

    def test_degenerate_inputs(self, capsys):
        assert main(["0", "1"]) == 0
        out = capsys.readouterr().out
        assert "0 => []" in out
        assert "1 => []" in out

    def test_failure_continues_with_next_number(self, capsys, monkeypatch):
        import factorization
        monkeypatch.setattr(factorization, "BRENTS_RHO_MAX_OFFSET", 1)
        assert main(["15", "16", "--alg", "brents_rho"]) == 1
        captured = capsys.readouterr()
        assert "15 => error:" in captured.err
        assert "16 => [2, 2, 2, 2]" in captured.out
