from tetris_core.timing import LONG_TICK, GravityTimer


def test_gravity_due_after_long_tick() -> None:
    timer = GravityTimer()
    for _ in range(LONG_TICK - 1):
        assert not timer.advance()
    assert timer.advance()
    assert timer.due
    timer.reset()
    assert timer.count == 0
    assert not timer.due


def test_force_triggers_next_advance() -> None:
    timer = GravityTimer(long_tick=10)
    timer.advance()
    timer.force()
    assert timer.advance()
