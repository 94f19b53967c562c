#!/usr/bin/env python3
"""
Console Output Test
コンソール出力のテスト
"""

from rotorsim.utils.console import Console


def make_console():
    c = Console()
    c.set_color(False)
    return c


def test_levels_and_streams(capsys):
    c = make_console()
    c.info("hello")
    c.success("done")
    c.warning("careful")
    c.error("broken")
    captured = capsys.readouterr()
    assert captured.out == "[INFO] hello\n[OK] done\n"
    assert captured.err == "[WARN] careful\n[ERROR] broken\n"


def test_custom_prefix(capsys):
    make_console().info("3 rotors", prefix="MIX")
    assert capsys.readouterr().out == "[MIX] 3 rotors\n"


def test_debug_only_when_verbose(capsys):
    c = make_console()
    c.debug("hidden")
    c.set_verbose(True)
    c.debug("shown")
    assert capsys.readouterr().out == "[DEBUG] shown\n"


def test_color_codes(capsys):
    c = Console()
    c.set_color(True)
    c.error("x")
    assert "\033[31m[ERROR]\033[0m x" in capsys.readouterr().err


def test_table(capsys):
    make_console().table(["Name", "Rotors"], [["quad-x", 4], ["hex-plus", 6]])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Name     | Rotors"
    assert lines[1] == "-" * len(lines[0])
    assert lines[3] == "hex-plus | 6     "


def test_power_bar(capsys):
    make_console().power_bar("R1", 0.5, width=10, suffix="↺")
    assert capsys.readouterr().out == "  R1 █████░░░░░  50% ↺\n"


def test_power_bar_clamps(capsys):
    c = make_console()
    c.power_bar("R2", 1.7, width=4)
    c.power_bar("R3", -0.2, width=4)
    assert capsys.readouterr().out == "  R2 ████ 100%\n  R3 ░░░░   0%\n"
