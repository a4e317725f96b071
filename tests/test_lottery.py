import pytest

from ostep_demos.lottery import Lottery, main


def make(seed=1):
    lottery = Lottery(seed)
    for tickets in (50, 100, 25):
        lottery.insert(tickets)
    return lottery


def test_insert_puts_new_job_at_head():
    lottery = make()
    assert lottery.jobs == (25, 100, 50)
    assert lottery.total == 175


def test_describe_format():
    assert make().describe() == "List: [25] [100] [50] "


@pytest.mark.parametrize(
    "winner, tickets",
    [(0, 25), (24, 25), (25, 100), (124, 100), (125, 50), (174, 50)],
)
def test_pick_boundaries(winner, tickets):
    assert make().pick(winner) == tickets


@pytest.mark.parametrize("winner", [-1, 175])
def test_pick_out_of_range(winner):
    with pytest.raises(ValueError):
        make().pick(winner)


def test_draw_without_tickets_fails():
    with pytest.raises(ValueError):
        Lottery(3).draw()


def test_draws_are_consistent_with_pick():
    lottery = make(7)
    for _ in range(50):
        winner, tickets = lottery.draw()
        assert 0 <= winner < 175
        assert tickets == lottery.pick(winner)


def test_same_seed_same_sequence():
    first, second = make(42), make(42)
    assert [first.draw() for _ in range(20)] == [second.draw() for _ in range(20)]


def test_zero_seed_behaves_like_one():
    zero, one = make(0), make(1)
    assert [zero.draw() for _ in range(10)] == [one.draw() for _ in range(10)]


def test_seed_one_matches_c_library():
    lottery = make(1)
    assert [lottery.draw(), lottery.draw()] == [(8, 25), (11, 25)]


def test_main_output(capsys):
    assert main(["1", "1"]) == 0
    out = capsys.readouterr().out
    assert out == (
        "List: [25] [100] [50] \n"
        "List: [25] [100] [50] \n"
        "winner: 8 25\n\n"
    )


def test_main_usage(capsys):
    with pytest.raises(SystemExit) as info:
        main(["1"])
    assert info.value.code == 1
    assert "usage: lottery <seed> <loops>" in capsys.readouterr().err