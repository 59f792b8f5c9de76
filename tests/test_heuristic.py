"""Tests for the heuristic evaluation pipeline."""

import asyncio
import inspect
import logging

import pytest

from _01_simulator import games
from _01_simulator.exceptions import NoLegalMovesError
from _02_agents import HeuristicAgent, Pending, Ready, as_evaluation, best_moves


class ScriptedAgent(HeuristicAgent):
    """Evaluates moves from a table; moves listed in `deferred` resolve later."""

    def __init__(self, evaluations, deferred=(), **kwargs):
        super().__init__(**kwargs)
        self.evaluations = evaluations
        self.deferred = set(deferred)

    def move_evaluation(self, move, game, player):
        value = self.evaluations[move]
        if move in self.deferred:
            return _later(value)
        return value


async def _later(value):
    await asyncio.sleep(0)
    return value


@pytest.mark.parametrize(
    "pairs",
    [
        [("a", 1)],
        [("a", 3), ("b", 5), ("c", 5)],
        [("a", -1), ("b", -1), ("c", -1)],
        [("a", 0.5), ("b", -2), ("c", 0.25), ("d", 0.5)],
        [("a", float("-inf")), ("b", 7)],
    ],
)
def test_best_moves_are_the_maximum_evaluated(pairs):
    best = list(best_moves(pairs))
    top = max(value for _, value in pairs)
    values = dict(pairs)

    assert best
    assert all(values[move] == top for move in best)
    assert all(values[m] <= values[b] for m in values if m not in best for b in best)
    assert best == [m for m, _ in pairs if m in best]


def test_best_moves_is_lazy_and_empty_for_no_moves():
    result = best_moves([("a", 1)])

    assert inspect.isgenerator(result)
    assert list(best_moves([])) == []


def test_best_moves_uses_exact_ties():
    assert list(best_moves([("a", 0.3), ("b", 0.1 + 0.2)])) == ["b"]
    assert list(best_moves([("a", 1), ("b", 1.0)])) == ["a", "b"]


def test_as_evaluation_tells_ready_from_pending():
    assert as_evaluation(2) == Ready(2)
    coro = _later(2)
    pending = as_evaluation(coro)
    assert isinstance(pending, Pending)
    assert asyncio.run(pending.awaitable) == 2


def test_select_moves_synchronous_returns_list():
    game = games.Predefined(width=3)
    agent = ScriptedAgent({1: 3, 2: 5, 3: 5}, seed=0)

    selected = agent.select_moves([1, 2, 3], game, "A")

    assert selected == [2, 3]


@pytest.mark.parametrize("deferred", [{1}, {2}, {1, 2, 3}])
def test_select_moves_asynchronous_matches_synchronous(deferred):
    game = games.Predefined(width=3)
    agent = ScriptedAgent({1: 3, 2: 5, 3: 5}, deferred=deferred, seed=0)

    selected = agent.select_moves([1, 2, 3], game, "A")

    assert inspect.isawaitable(selected)
    assert asyncio.run(_await(selected)) == [2, 3]


async def _await(awaitable):
    return await awaitable


def test_deferred_evaluations_run_concurrently():
    class RendezvousAgent(HeuristicAgent):
        def __init__(self):
            super().__init__(seed=0)
            self.events = {}

        def move_evaluation(self, move, game, player):
            return self._meet(move)

        async def _meet(self, move):
            # Each evaluation waits for the other one; sequential awaiting would never finish.
            mine = self.events.setdefault(move, asyncio.Event())
            other = self.events.setdefault(3 - move, asyncio.Event())
            mine.set()
            await other.wait()
            return move

    async def run():
        agent = RendezvousAgent()
        return await asyncio.wait_for(agent.decision(games.Predefined(width=2), "A"), timeout=5)

    assert asyncio.run(run()) == 2


def test_decision_picks_among_best_moves():
    game = games.Predefined(width=4)
    agent = ScriptedAgent({1: 0, 2: 9, 3: 1, 4: 9}, seed=11)

    picks = {agent.decision(game, "A") for _ in range(200)}

    assert picks == {2, 4}


def test_decision_with_deferred_evaluations_is_awaitable():
    game = games.Predefined(width=3)
    agent = ScriptedAgent({1: 3, 2: 5, 3: 1}, deferred={1}, seed=0)

    decision = agent.decision(game, "A")

    assert inspect.isawaitable(decision)
    assert asyncio.run(_await(decision)) == 2


def test_decision_without_moves_fails_loudly():
    finished = games.Choose2Win().next({"This": "lose"})
    with pytest.raises(NoLegalMovesError):
        HeuristicAgent(seed=0).decision(finished, "This")


@pytest.mark.parametrize("heuristic", [None, lambda game, player: 1000.0, lambda game, player: -1000.0])
def test_state_evaluation_of_finished_game_is_its_result(heuristic):
    agent = HeuristicAgent(heuristic, seed=0)
    won = games.Choose2Win().next({"This": "win"})
    drawn = games.TicTacToe(board="XOXXOOOXX")

    assert agent.state_evaluation(won, "This") == 1
    assert agent.state_evaluation(won, "That") == -1
    assert agent.state_evaluation(drawn, "Xs") == 0


def test_default_heuristic_is_random_in_half_unit_interval():
    agent = HeuristicAgent(seed=3)
    game = games.TicTacToe()

    values = [agent.heuristic(game, "Xs") for _ in range(500)]

    assert all(-0.5 <= v < 0.5 for v in values)
    assert len(set(values)) > 1


def test_move_evaluation_looks_one_ply_ahead():
    seen = []

    def heuristic(game, player):
        seen.append((game.board, player))
        return 0.0

    agent = HeuristicAgent(heuristic, seed=0)
    agent.move_evaluation(4, games.TicTacToe(), "Xs")

    assert seen == [("____X____", "Xs")]


def test_heuristic_agent_takes_the_win():
    agent = HeuristicAgent(seed=9)
    for _ in range(20):
        assert agent.decision(games.Choose2Win(), "This") == "win"


def test_async_heuristic_flows_through_decision():
    async def heuristic(game, player):
        await asyncio.sleep(0)
        return 1.0 if game.board[4] == "X" else 0.0

    agent = HeuristicAgent(heuristic, seed=0)
    decision = agent.decision(games.TicTacToe(), "Xs")

    assert asyncio.run(_await(decision)) == 4


def test_same_seed_same_decision():
    game = games.TicTacToe()

    picks_a = [HeuristicAgent(seed=42).decision(game, "Xs") for _ in range(3)]
    picks_b = [HeuristicAgent(seed=42).decision(game, "Xs") for _ in range(3)]

    assert picks_a == picks_b
    assert len(set(picks_a)) == 1


def test_decision_is_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="_02_agents.heuristic"):
        HeuristicAgent(seed=0, name="probe").decision(games.Choose2Win(), "This")

    assert any("probe chose 'win'" in message for message in caplog.messages)


def test_failing_evaluation_closes_earlier_deferred_ones():
    created = []

    class FailsOnSecondMove(HeuristicAgent):
        def move_evaluation(self, move, game, player):
            if move == 2:
                raise RuntimeError("evaluation failed")
            coroutine = _later(1)
            created.append(coroutine)
            return coroutine

    agent = FailsOnSecondMove(seed=0)

    with pytest.raises(RuntimeError, match="evaluation failed"):
        agent.select_moves([1, 2], games.Predefined(width=2), "A")

    assert len(created) == 1
    assert inspect.getcoroutinestate(created[0]) == inspect.CORO_CLOSED


def test_failing_deferred_evaluation_cancels_the_others():
    cancelled = []

    class OneFails(HeuristicAgent):
        def move_evaluation(self, move, game, player):
            return self._fail() if move == 1 else self._wait_forever(move)

        async def _fail(self):
            await asyncio.sleep(0)
            raise RuntimeError("evaluation failed")

        async def _wait_forever(self, move):
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                cancelled.append(move)
                raise

    agent = OneFails(seed=0)

    async def run():
        await agent.select_moves([1, 2, 3], games.Predefined(width=3), "A")

    with pytest.raises(RuntimeError, match="evaluation failed"):
        asyncio.run(run())

    assert sorted(cancelled) == [2, 3]
