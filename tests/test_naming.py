from pathlib import Path

import pytest

from mermaidpng.naming import ensure_png_suffix, name_for


def test_single_diagram_keeps_base_name():
    assert name_for("out/diagram.png", 1, 1) == Path("out/diagram.png")
    assert name_for("out/diagram", 1, 1) == Path("out/diagram.png")
    assert name_for("out/diagram.png", 2, 2) == Path("out/diagram_2.png")


def test_suffix_match_is_case_sensitive():
    assert name_for("out/diagram.PNG", 1, 1) == Path("out/diagram.PNG.png")
    assert name_for("out/diagram.PNG", 1, 2) == Path("out/diagram_1.PNG.png")


def test_extension_is_always_png():
    assert name_for("out/diagram.jpg", 1, 1) == Path("out/diagram.jpg.png")
    assert name_for("out/diagram.jpg", 2, 2) == Path("out/diagram_2.jpg.png")


def test_idempotent_on_extension():
    for base in ("a.png", "a", "dir/a.svg"):
        once = name_for(base, 1, 1)
        assert name_for(once, 1, 1) == once
        assert ensure_png_suffix(once) == once


def test_batch_names_in_index_order():
    total = 4
    assert [name_for(Path("out.png"), i, total) for i in range(1, total + 1)] == [
        Path("out_1.png"),
        Path("out_2.png"),
        Path("out_3.png"),
        Path("out_4.png"),
    ]
    assert name_for("build/out", 3, 3) == Path("build/out_3.png")


@pytest.mark.parametrize("index,total", [(0, 1), (2, 1), (1, 0), (-1, 3)])
def test_rejects_out_of_range(index: int, total: int):
    with pytest.raises(ValueError):
        name_for("out.png", index, total)
