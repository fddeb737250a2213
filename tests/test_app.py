import pytest

from solong.app import _MoveCounter, main

VALID_MAP = "11111\n1P0C1\n100E1\n11111\n"


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_no_arguments(capsys):
    assert main([]) == 1
    assert "Error, argumentos incorrectos" in capsys.readouterr().err


def test_too_many_arguments(capsys):
    assert main(["a.ber", "b.ber"]) == 1
    assert "Error, argumentos incorrectos" in capsys.readouterr().err


def test_wrong_suffix(capsys):
    assert main(["map.txt"]) == 1
    assert "Error, argumento no es .ber" in capsys.readouterr().err


def test_empty_map(tmp_path, capsys):
    path = write(tmp_path, "empty.ber", "")
    assert main([path]) == 1
    assert "Error, mapa vacio" in capsys.readouterr().err


def test_missing_map_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.ber")]) == 1
    assert "Error, mapa vacio" in capsys.readouterr().err


def test_empty_line_in_map(tmp_path, capsys):
    path = write(tmp_path, "gap.ber", "11111\n\n1P0C1\n")
    assert main([path]) == 1
    assert "Error, parece que una linea esta vacía" in capsys.readouterr().err


def test_not_rectangular(tmp_path, capsys):
    path = write(tmp_path, "shape.ber", "11111\n1P0C1\n10E1\n11111\n")
    assert main([path]) == 1
    assert "Error, el mapa no es rectangular" in capsys.readouterr().err


def test_not_closed(tmp_path, capsys):
    path = write(tmp_path, "open.ber", "11111\n1P0C0\n100E1\n11111\n")
    assert main([path]) == 1
    assert "Error, el mapa no esta cerrado" in capsys.readouterr().err


def test_missing_elements(tmp_path, capsys):
    path = write(tmp_path, "bare.ber", "11111\n1P001\n100E1\n11111\n")
    assert main([path]) == 1
    assert "Error, el mapa no tiene los elementos necesarios" in capsys.readouterr().err


def test_no_way_out(tmp_path, capsys):
    path = write(tmp_path, "shut.ber", "111111\n1P1C01\n1110E1\n111111\n")
    assert main([path]) == 1
    assert "Error, el mapa no tiene salida" in capsys.readouterr().err


def test_missing_sprites(tmp_path, capsys, monkeypatch):
    path = write(tmp_path, "ok.ber", VALID_MAP)
    monkeypatch.chdir(tmp_path)
    assert main([path]) == 1
    assert "PNG file is invalid or corrupted" in capsys.readouterr().err


def test_counter_counts_one_move_per_threshold():
    counter = _MoveCounter()
    assert counter.update(64) == 1
    assert counter.moves == 1


def test_counter_accumulates_small_steps():
    counter = _MoveCounter()
    results = [counter.update(step) for step in range(4, 64, 4)]
    assert all(result is None for result in results)
    assert counter.update(64) == 1
    assert counter.moves == 1


def test_counter_resets_after_each_move():
    counter = _MoveCounter()
    counter.update(64)
    assert counter.update(68) is None
    assert counter.update(128) == 2


@pytest.mark.parametrize("threshold", [8, 16, 32])
def test_counter_threshold_invariant(threshold):
    counter = _MoveCounter(threshold)
    for travelled in range(1, threshold * 3 + 1):
        counter.update(travelled)
    assert counter.moves == 3