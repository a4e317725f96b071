import os

import pytest

from ostep_demos.processes import fork_exec, fork_hello, fork_redirect, fork_wait, main


@pytest.fixture
def sample(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("a b\nc\n")
    return path


def test_fork_hello_greets_from_both_sides(capfd):
    pid = fork_hello()
    waited, status = os.waitpid(pid, 0)
    out = capfd.readouterr().out
    assert waited == pid
    assert os.WIFEXITED(status) and os.WEXITSTATUS(status) == 0
    me = os.getpid()
    assert out.count(f"hello world (pid:{me})") == 1
    assert f"hello, I am child (pid:{pid})" in out
    assert f"hello, I am parent of {pid} (pid:{me})" in out


def test_fork_wait_reports_child_pid(capfd):
    pid = fork_wait()
    out = capfd.readouterr().out
    lines = out.splitlines()
    assert f"hello, I am child (pid:{pid})" in lines
    assert lines[-1] == f"hello, I am parent of {pid} (wc:{pid}) (pid:{os.getpid()})"


def test_fork_exec_runs_word_count(sample, capfd):
    pid = fork_exec(sample)
    out = capfd.readouterr().out
    assert f"hello, I am child (pid:{pid})" in out
    counted = [line.split() for line in out.splitlines() if line.endswith(str(sample))]
    assert counted[0][:3] == ["2", "3", "6"]
    assert "this shouldn't print out" not in out


def test_fork_redirect_writes_to_file(sample, tmp_path):
    output = tmp_path / "p4.output"
    pid = fork_redirect(sample, output)
    assert pid > 0
    fields = output.read_text().split()
    assert fields[:3] == ["2", "3", "6"]
    assert fields[-1] == str(sample)


def test_main_p4_redirects(sample, tmp_path):
    output = tmp_path / "out.txt"
    assert main(["p4", str(sample), str(output)]) == 0
    assert output.read_text().split()[-1] == str(sample)


def test_main_rejects_unknown_demo():
    with pytest.raises(SystemExit) as info:
        main(["p9"])
    assert info.value.code == 2