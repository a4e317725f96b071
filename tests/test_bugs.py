import threading

import pytest

from ostep_demos.bugs import (
    PR_STATE_INIT,
    PROC_PID,
    PrThread,
    ThreadInfo,
    atomicity_demo,
    atomicity_main,
    deadlock_demo,
    deadlock_main,
    ordering_demo,
    ordering_main,
)


def test_atomicity_violation_raises():
    with pytest.raises(RuntimeError):
        atomicity_demo(False, check_delay=0.3, clear_delay=0.05)


def test_atomicity_unfixed_works_when_clear_is_late(capsys):
    assert atomicity_demo(False, check_delay=0.02, clear_delay=0.3) == PROC_PID
    assert "t1: use!" in capsys.readouterr().out


def test_atomicity_fixed_uses_pid_before_clear(capsys):
    assert atomicity_demo(True, check_delay=0.2, clear_delay=0.05) == PROC_PID
    out = capsys.readouterr().out
    assert out.index("t1: use!") < out.index("t2: set to NULL")
    assert out.splitlines()[-1] == "main: end"


def test_thread_info_can_be_cleared():
    info = ThreadInfo(pid=PROC_PID)
    info.pid = None
    assert info == ThreadInfo(pid=None)


def test_atomicity_main_fixed(capsys):
    code = atomicity_main(["--fixed", "--check-delay", "0.1", "--clear-delay", "0.02"])
    assert code == 0
    assert f"{PROC_PID}\n" in capsys.readouterr().out


def test_atomicity_main_unfixed_fails(capsys):
    with pytest.raises(SystemExit) as excinfo:
        atomicity_main(["--check-delay", "0.2", "--clear-delay", "0.02"])
    assert excinfo.value.code == 1
    assert "atomicity:" in capsys.readouterr().err


def test_deadlock_demo_acquisitions_match_give_ups(capsys):
    gave_up = deadlock_demo(0.5)
    assert gave_up <= {"t1", "t2"}
    lines = capsys.readouterr().out.splitlines()
    acquired = [line for line in lines if line.endswith("acquired")]
    assert len(acquired) == 4 - len(gave_up)
    assert lines[0] == "main: begin"
    assert lines[-1] == "main: end"


def test_deadlock_main_finishes(capsys):
    assert deadlock_main(["--timeout", "0.5"]) == 0
    assert "t1: begin" in capsys.readouterr().out


def test_ordering_unfixed_fails_with_delay():
    with pytest.raises(RuntimeError):
        ordering_demo(False, 0.1)


def test_ordering_fixed_reads_initial_state(capsys):
    assert ordering_demo(True, 0.05) == PR_STATE_INIT
    out = capsys.readouterr().out
    assert f"mMain: state is {PR_STATE_INIT}" in out
    assert out.splitlines()[-1] == "ordering: end"


def test_ordering_main_fixed(capsys):
    assert ordering_main(["--fixed", "--delay", "0.05"]) == 0
    assert "ordering: begin" in capsys.readouterr().out


def test_ordering_main_unfixed_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        ordering_main(["--delay", "0.1"])
    assert excinfo.value.code == 1


def test_pr_thread_returns_result():
    thread = PrThread(lambda: "finished", 0)
    assert thread.state == PR_STATE_INIT
    assert thread.wait() == "finished"


def test_pr_thread_reraises_error():
    def boom():
        raise ValueError("bad")

    thread = PrThread(boom, 0)
    with pytest.raises(ValueError, match="bad"):
        thread.wait()


def test_pr_thread_runs_during_delay():
    started = threading.Event()
    thread = PrThread(started.set, 0.1)
    assert started.is_set()
    thread.wait()