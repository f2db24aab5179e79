import io
import os
import signal
import sys

import pytest

from minishell.builtins import (
    BuiltinError,
    is_builtin,
    lcd,
    lecho,
    lexit,
    lkill,
    lls,
    run_builtin,
)


def _spawn_sleeper():
    argv = [sys.executable, "-c", "import time; time.sleep(30)"]
    return os.posix_spawn(sys.executable, argv, dict(os.environ))


def _listing():
    out = io.StringIO()
    lls(["lls"], out)
    return out.getvalue()


def test_lecho_joins_arguments():
    out = io.StringIO()
    lecho(["lecho", "a", "b"], out)
    assert out.getvalue() == "a b\n"


def test_lecho_without_arguments_prints_newline():
    out = io.StringIO()
    lecho(["lecho"], out)
    assert out.getvalue() == "\n"


def test_lexit_exits_with_zero():
    with pytest.raises(SystemExit) as info:
        lexit(["exit"], io.StringIO())
    assert info.value.code == 0


def test_lcd_changes_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(os.getcwd())
    (tmp_path / "marker").write_text("")
    lcd(["lcd", str(tmp_path)])
    assert _listing() == "marker\n"
    assert os.path.samefile(os.getcwd(), tmp_path)


def test_lcd_without_argument_goes_home(tmp_path, monkeypatch):
    monkeypatch.chdir(os.getcwd())
    monkeypatch.setenv("HOME", str(tmp_path))
    (tmp_path / "homefile").write_text("")
    lcd(["lcd"])
    assert _listing() == "homefile\n"
    assert os.path.samefile(os.getcwd(), tmp_path)


def test_lcd_without_home_fails(monkeypatch):
    monkeypatch.delenv("HOME", raising=False)
    with pytest.raises(BuiltinError):
        lcd(["lcd"])


def test_lcd_too_many_arguments(tmp_path):
    with pytest.raises(BuiltinError):
        lcd(["lcd", str(tmp_path), str(tmp_path)])


def test_lcd_missing_directory(tmp_path):
    with pytest.raises(BuiltinError):
        lcd(["lcd", str(tmp_path / "missing")])


def test_lls_hides_dot_entries(tmp_path):
    for name in ("a", "b", ".hidden"):
        (tmp_path / name).write_text("")
    out = io.StringIO()
    lls(["lls", str(tmp_path)], out)
    assert sorted(out.getvalue().splitlines()) == ["a", "b"]


def test_lls_defaults_to_current_directory(tmp_path, monkeypatch):
    (tmp_path / "only").write_text("")
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    lls(["lls"], out)
    assert out.getvalue() == "only\n"


def test_lls_missing_directory(tmp_path):
    with pytest.raises(BuiltinError):
        lls(["lls", str(tmp_path / "missing")], io.StringIO())


@pytest.mark.parametrize(
    "args",
    [["lkill"], ["lkill", "abc"], ["lkill", "12x"], ["lkill", "99999999999"],
     ["lkill", "-9", "nope"], ["lkill", " "]],
)
def test_lkill_rejects_bad_arguments(args):
    with pytest.raises(BuiltinError):
        lkill(args)


def test_lkill_sends_sigterm_by_default():
    pid = _spawn_sleeper()
    lkill(["lkill", str(pid)])
    _, status = os.waitpid(pid, 0)
    assert os.WIFSIGNALED(status)
    assert os.WTERMSIG(status) == signal.SIGTERM


def test_lkill_with_explicit_signal():
    pid = _spawn_sleeper()
    lkill(["lkill", "-9", str(pid)])
    _, status = os.waitpid(pid, 0)
    assert os.WTERMSIG(status) == signal.SIGKILL


def test_is_builtin():
    assert is_builtin("lecho")
    assert is_builtin("exit")
    assert not is_builtin("ls")


def test_run_builtin_dispatches():
    out = io.StringIO()
    run_builtin(["lecho", "x"], out)
    assert out.getvalue() == "x\n"


def test_run_builtin_unknown():
    with pytest.raises(BuiltinError):
        run_builtin(["nosuch"], io.StringIO())