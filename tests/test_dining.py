import io

import pytest

from ostep_demos.dining import NUM_PHILOSOPHERS, Table, dine, left, main, right


def test_left_is_own_seat():
    assert [left(p) for p in range(5)] == [0, 1, 2, 3, 4]


def test_right_wraps_around():
    assert [right(p) for p in range(5)] == [1, 2, 3, 4, 0]


def test_get_and_put_forks_track_holders():
    table = Table(avoid_deadlock=True)
    table.get_forks(1)
    assert table.holders == (None, 1, 1, None, None)
    table.put_forks(1)
    assert table.holders == (None,) * NUM_PHILOSOPHERS


def test_last_philosopher_holds_both_forks():
    table = Table(avoid_deadlock=False)
    table.get_forks(4)
    assert table.holders == (4, None, None, None, 4)
    table.put_forks(4)
    assert table.holders == (None,) * NUM_PHILOSOPHERS


def test_every_seat_can_eat_in_turn():
    table = Table(avoid_deadlock=False)
    for p in range(NUM_PHILOSOPHERS):
        table.get_forks(p)
        assert table.holders[left(p)] == p
        assert table.holders[right(p)] == p
        table.put_forks(p)
    assert table.holders == (None,) * NUM_PHILOSOPHERS


def test_no_deadlock_last_takes_right_first():
    out = io.StringIO()
    table = Table(avoid_deadlock=True, verbose=True, out=out)
    table.get_forks(4)
    lines = out.getvalue().splitlines()
    assert [line.strip() for line in lines] == ["4 try 0", "4 try 4"]
    assert all(line.startswith(" " * 40) for line in lines)


def test_no_deadlock_other_seats_take_left_first():
    out = io.StringIO()
    table = Table(avoid_deadlock=True, verbose=True, out=out)
    table.get_forks(2)
    assert [line.strip() for line in out.getvalue().splitlines()] == ["try 2", "try 3"]


def test_deadlock_order_takes_left_first():
    out = io.StringIO()
    table = Table(avoid_deadlock=False, verbose=True, out=out)
    table.get_forks(4)
    assert [line.strip() for line in out.getvalue().splitlines()] == ["4: try 4", "4: try 0"]


def test_quiet_table_writes_nothing():
    out = io.StringIO()
    table = Table(avoid_deadlock=True, verbose=False, out=out)
    table.get_forks(0)
    table.put_forks(0)
    assert out.getvalue() == ""


@pytest.mark.parametrize("seat", [-1, 5])
def test_unknown_seat_rejected(seat):
    table = Table()
    with pytest.raises(ValueError):
        table.get_forks(seat)
    with pytest.raises(ValueError):
        table.put_forks(seat)


def test_dine_everyone_eats(capsys):
    meals = dine(20, avoid_deadlock=True)
    assert meals == [20] * NUM_PHILOSOPHERS
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "dining: started"
    assert lines[-1] == "dining: finished"


def test_dine_without_meals_finishes(capsys):
    assert dine(0, avoid_deadlock=False) == [0] * NUM_PHILOSOPHERS
    assert capsys.readouterr().out.splitlines() == ["dining: started", "dining: finished"]


def test_dine_verbose_reports_each_meal(capsys):
    loops = 3
    dine(loops, avoid_deadlock=True, verbose=True)
    lines = [line.strip() for line in capsys.readouterr().out.splitlines()]
    for p in range(NUM_PHILOSOPHERS):
        assert lines.count(f"{p}: start") == 1
        assert lines.count(f"{p}: eat") == loops
        assert lines.count(f"{p}: done") == loops


def test_main_runs(capsys):
    assert main(["2", "--avoid-deadlock"]) == 0
    assert "dining: finished" in capsys.readouterr().out


def test_main_requires_count():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2