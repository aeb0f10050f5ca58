import threading

import pytest

from tetris_rl.game import Action, GameConfig, GameDriver, Position, TetrisGame


def _driver(seed=2, drop_interval_ms=500):
    game = TetrisGame(GameConfig(random_seed=seed, drop_interval_ms=drop_interval_ms))
    return GameDriver(game)


def test_commands_apply_in_submission_order():
    driver = _driver()
    start = driver.game.state.active.position
    for action in (Action.DOWN, Action.DOWN, Action.LEFT, Action.RIGHT, Action.RIGHT):
        driver.submit(action)
    assert driver.game.state.active.position == start
    assert driver.pump() == 5
    assert driver.snapshot().position == start.shifted(2, 1)
    assert driver.pump() == 0


def test_advance_queues_one_tick_per_interval():
    driver = _driver()
    assert driver.advance(1000) == 0
    assert driver.advance(1499) == 0
    assert driver.advance(1500) == 1
    assert driver.advance(2750) == 2
    driver.pump()
    assert driver.game.step_count == 3


def test_restart_discards_pending_commands():
    driver = _driver()
    for _ in range(50):
        driver.submit(Action.TICK)
    snap = driver.restart(seed=2)
    assert driver.pump() == 0
    assert snap.position == Position(0, 4)
    assert not snap.grid.any()


def test_producer_threads_are_serialised():
    driver = _driver(drop_interval_ms=10**9)
    start = driver.game.state.active.position

    def producer(action, count):
        for _ in range(count):
            driver.submit(action)

    threads = [
        threading.Thread(target=producer, args=(Action.LEFT, 3)),
        threading.Thread(target=producer, args=(Action.RIGHT, 3)),
        threading.Thread(target=producer, args=(Action.DOWN, 4)),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    stop = threading.Event()
    stop.set()
    snap = driver.run(stop)
    assert snap.position.row == start.row + 4
    assert driver.game.step_count == 0


def test_run_returns_on_game_over():
    driver = _driver(drop_interval_ms=1)
    now = [0.0]

    def clock():
        now[0] += 0.05
        return now[0]

    snap = driver.run(threading.Event(), clock=clock, poll_s=0.0)
    assert snap.game_over


def test_zero_drop_interval_is_rejected():
    game = TetrisGame(GameConfig(random_seed=2))
    with pytest.raises(AssertionError):
        GameDriver(game, drop_interval_ms=0)


class _HookedQueue:
    """Wraps the driver queue and calls `on_dequeue` once, right after a dequeue."""

    def __init__(self, inner, on_dequeue):
        self.inner = inner
        self.on_dequeue = on_dequeue

    def _fire(self):
        hook, self.on_dequeue = self.on_dequeue, None
        if hook is not None:
            hook()

    def put(self, item):
        self.inner.put(item)

    def get_nowait(self):
        item = self.inner.get_nowait()
        self._fire()
        return item

    def get(self, timeout=None):
        item = self.inner.get(timeout=timeout)
        self._fire()
        return item

    def empty(self):
        return self.inner.empty()


def test_restart_waits_for_command_being_pumped():
    driver = _driver()
    restarter = threading.Thread(target=driver.restart, kwargs={"seed": 2})
    blocked = []

    def restart_mid_pump():
        restarter.start()
        restarter.join(timeout=0.2)
        blocked.append(restarter.is_alive())

    driver._commands = _HookedQueue(driver._commands, restart_mid_pump)
    driver.submit(Action.LEFT)
    driver.pump()
    restarter.join()

    # The restart ran after LEFT was applied to the old game, not before
    assert blocked == [True]
    assert driver.snapshot().position == Position(0, 4)
    assert driver.pump() == 0


def test_command_from_before_restart_is_dropped_by_run():
    driver = _driver(drop_interval_ms=10**9)
    driver._commands = _HookedQueue(driver._commands, lambda: driver.restart(seed=2))
    driver.submit(Action.LEFT)
    driver.submit(Action.DOWN)

    stop = threading.Event()
    stop.set()
    snap = driver.run(stop)
    assert snap.position == Position(0, 4)
    assert driver.game.step_count == 0
