import pytest

from qcomposer.cli import main


def test_bell_demo_prints_probabilities(capsys):
    assert main(["bell"]) == 0
    out = capsys.readouterr().out
    assert "00  0.500000" in out
    assert "11  0.500000" in out
    assert "01  0.000000" in out


def test_toffoli_demo_sets_every_bit(capsys):
    assert main(["toffoli", "-n", "4"]) == 0
    out = capsys.readouterr().out
    assert "1111  1.000000" in out


def test_polar_flag(capsys):
    main(["superposition", "-n", "1", "--polar"])
    assert "polar: |0⟩: 0.71e^(i * 0.00°)" in capsys.readouterr().out


def test_too_many_qubits_is_an_error(capsys):
    assert main(["ghz", "-n", "5", "--max-qubits", "4"]) == 2
    assert "max_qubits" in capsys.readouterr().err


def test_unknown_demo_exits():
    with pytest.raises(SystemExit):
        main(["teleport"])
