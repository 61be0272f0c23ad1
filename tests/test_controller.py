"""Tests for controller.py - intent dispatch and save sequencing."""

import asyncio
import itertools

from fakes import FailingStorage, RecordingPersistence
from simpletodo.controller import TodoController
from simpletodo.providers import Task
from simpletodo.state_provider import MemoryKeyValueStorage, PersistenceBridge
from simpletodo.store import AddTask, CancelEdit, TaskStore


def make_store() -> TaskStore:
    ticks = itertools.count(1_700_000_000_000)
    return TaskStore(clock=lambda: next(ticks))


class TestStart:
    """Tests for the one-time load."""

    def test_loads_saved_tasks(self) -> None:
        persistence = RecordingPersistence(saved=[Task("1", "saved")])
        controller = TodoController(persistence)

        state = asyncio.run(controller.start())

        assert state.tasks == (Task("1", "saved"),)
        assert controller.started is True

    def test_nothing_saved_starts_empty(self) -> None:
        controller = TodoController(RecordingPersistence(saved=None))

        assert asyncio.run(controller.start()).tasks == ()

    def test_loads_only_once(self) -> None:
        persistence = RecordingPersistence(saved=[Task("1", "saved")])
        controller = TodoController(persistence)

        async def scenario() -> None:
            await controller.start()
            await controller.add("new")
            await controller.start()

        asyncio.run(scenario())

        assert persistence.load_calls == 1
        assert [t.text for t in controller.tasks] == ["saved", "new"]

    def test_start_does_not_save(self) -> None:
        persistence = RecordingPersistence(saved=[Task("1", "saved")])

        asyncio.run(TodoController(persistence).start())

        assert persistence.save_calls == []


class TestDispatch:
    """Tests for save-after-mutation sequencing."""

    def test_saves_full_sequence_after_each_mutation(self) -> None:
        persistence = RecordingPersistence()
        controller = TodoController(persistence, store=make_store())

        async def scenario() -> None:
            await controller.start()
            await controller.add("a")
            await controller.add("b")
            await controller.toggle_complete(controller.tasks[0].id)

        asyncio.run(scenario())

        assert len(persistence.save_calls) == 3
        assert [t.text for t in persistence.save_calls[1]] == ["a", "b"]
        assert persistence.save_calls[-1] == controller.tasks
        assert persistence.save_calls[-1][0].completed is True

    def test_no_save_for_noop_intents(self) -> None:
        persistence = RecordingPersistence()
        controller = TodoController(persistence)

        async def scenario() -> list[bool]:
            return [
                await controller.add("   "),
                await controller.toggle_complete("missing"),
                await controller.delete("missing"),
                await controller.commit_edit(),
            ]

        assert asyncio.run(scenario()) == [False, False, False, False]
        assert persistence.save_calls == []

    def test_no_save_for_selection_only_intents(self) -> None:
        persistence = RecordingPersistence(saved=[Task("1", "a")])
        controller = TodoController(persistence)

        async def scenario() -> None:
            await controller.start()
            await controller.begin_edit("1", "a")
            await controller.update_draft("b")
            await controller.cancel_edit()

        asyncio.run(scenario())

        assert persistence.save_calls == []
        assert controller.editing is None

    def test_commit_edit_saves(self) -> None:
        persistence = RecordingPersistence(saved=[Task("1", "a")])
        controller = TodoController(persistence)

        async def scenario() -> None:
            await controller.start()
            await controller.begin_edit("1", "a")
            await controller.update_draft("b")
            await controller.commit_edit()

        asyncio.run(scenario())

        assert persistence.save_calls == [(Task("1", "b"),)]

    def test_blank_commit_does_not_save(self) -> None:
        persistence = RecordingPersistence(saved=[Task("1", "a")])
        controller = TodoController(persistence)

        async def scenario() -> None:
            await controller.start()
            await controller.begin_edit("1", "a")
            await controller.update_draft("  ")
            await controller.commit_edit()

        asyncio.run(scenario())

        assert persistence.save_calls == []
        assert controller.tasks == (Task("1", "a"),)
        assert controller.editing is None

    def test_accepts_intent_objects(self) -> None:
        persistence = RecordingPersistence()
        controller = TodoController(persistence)

        async def scenario() -> tuple[bool, bool]:
            return await controller.dispatch(AddTask("x")), await controller.dispatch(
                CancelEdit()
            )

        assert asyncio.run(scenario()) == (True, False)
        assert len(persistence.save_calls) == 1


class TestSaveFailure:
    """A failed write never blocks or rolls back in-memory changes."""

    def test_mutation_kept_when_save_fails(self) -> None:
        controller = TodoController(RecordingPersistence(save_ok=False))

        async def scenario() -> None:
            await controller.start()
            await controller.add("still here")

        asyncio.run(scenario())

        assert [t.text for t in controller.tasks] == ["still here"]
        assert controller.last_save_ok is False

    def test_recovers_after_storage_comes_back(self) -> None:
        storage = FailingStorage(fail_writes=True)
        controller = TodoController(PersistenceBridge(storage), store=make_store())

        async def scenario() -> None:
            await controller.start()
            await controller.add("a")
            storage.fail_writes = False
            await controller.add("b")

        asyncio.run(scenario())

        assert controller.last_save_ok is True
        reloaded = asyncio.run(PersistenceBridge(storage).load_all())
        assert [t.text for t in reloaded] == ["a", "b"]


class TestScenario:
    """End-to-end flow against in-memory storage."""

    def test_add_toggle_edit_delete(self) -> None:
        storage = MemoryKeyValueStorage()
        controller = TodoController(PersistenceBridge(storage))

        async def scenario() -> None:
            await controller.start()
            await controller.add("Buy milk")
            task_id = controller.tasks[0].id
            assert controller.tasks[0].completed is False

            await controller.toggle_complete(task_id)
            assert controller.tasks[0].completed is True

            await controller.begin_edit(task_id, "Buy milk")
            await controller.update_draft("Buy oat milk")
            await controller.commit_edit()
            assert controller.tasks[0].text == "Buy oat milk"
            assert controller.tasks[0].completed is True
            assert controller.editing is None

            saved = await PersistenceBridge(storage).load_all()
            assert saved == list(controller.tasks)

            await controller.delete(task_id)
            assert controller.tasks == ()

        asyncio.run(scenario())

        assert asyncio.run(PersistenceBridge(storage).load_all()) == []

    def test_restart_restores_tasks(self, file_storage) -> None:
        first = TodoController(PersistenceBridge(file_storage), store=make_store())

        async def session_one() -> None:
            await first.start()
            await first.add("one")
            await first.add("two")
            await first.toggle_complete(first.tasks[1].id)

        asyncio.run(session_one())

        second = TodoController(PersistenceBridge(file_storage))
        asyncio.run(second.start())

        assert second.tasks == first.tasks
