# topmark:header:start
#
#   project      : BuildProblems
#   file         : test_operations.py
#   file_relpath : tests/reporter/test_operations.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `CurrentOperationRef` scoping."""

from __future__ import annotations

import asyncio
import contextvars
import threading
from contextlib import ExitStack

import pytest

from buildproblems.operations import CurrentOperationRef, OperationIdentifier
from tests.conftest import op


def test_no_operation_by_default() -> None:
    """A fresh ref has nothing in flight."""
    assert CurrentOperationRef().get_id() is None


def test_running_restores_previous_value() -> None:
    """Nested blocks behave like a stack, also when the block raises."""
    ref = CurrentOperationRef()
    with ref.running(op("outer")) as outer:
        assert outer == op("outer")
        with pytest.raises(RuntimeError), ref.running(op("inner")):
            assert ref.get_id() == op("inner")
            raise RuntimeError
        assert ref.get_id() == op("outer")
    assert ref.get_id() is None


def test_refs_are_independent() -> None:
    """Two refs never see each other's operations."""
    a, b = CurrentOperationRef(), CurrentOperationRef()
    with a.running(op()):
        assert b.get_id() is None


def test_new_threads_start_without_operation() -> None:
    """The current operation does not leak into threads started inside it."""
    ref = CurrentOperationRef()
    seen: list[OperationIdentifier | None] = []

    with ref.running(op()):
        t = threading.Thread(target=lambda: seen.append(ref.get_id()))
        t.start()
        t.join()

    assert seen == [None]


def test_tasks_see_their_own_operation() -> None:
    """Each asyncio task keeps its own current operation."""
    ref = CurrentOperationRef()

    async def _task(name: str) -> list[OperationIdentifier | None]:
        with ref.running(op(name)):
            await asyncio.sleep(0)
            first = ref.get_id()
            await asyncio.sleep(0)
            return [first, ref.get_id()]

    async def _main() -> list[list[OperationIdentifier | None]]:
        return list(await asyncio.gather(_task("a"), _task("b")))

    assert asyncio.run(_main()) == [[op("a"), op("a")], [op("b"), op("b")]]


def test_new_operation_ids_are_unique_and_sequential() -> None:
    """Generated ids increase monotonically, also across threads."""
    ref = CurrentOperationRef()
    ids: list[OperationIdentifier] = []
    lock = threading.Lock()

    def _worker() -> None:
        for _ in range(50):
            new_id = ref.new_operation_id()
            with lock:
                ids.append(new_id)

    threads = [threading.Thread(target=_worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(i.value for i in ids) == list(range(1, 201))  # type: ignore[type-var]


def test_many_refs_share_one_context_variable() -> None:
    """Nested operations on many refs add a single entry to the context."""
    refs = [CurrentOperationRef() for _ in range(50)]
    baseline = len(contextvars.copy_context())

    with ExitStack() as stack:
        for i, ref in enumerate(refs):
            stack.enter_context(ref.running(op(i)))
        assert len(contextvars.copy_context()) <= baseline + 1
        assert [ref.get_id() for ref in refs] == [op(i) for i in range(50)]

    assert all(ref.get_id() is None for ref in refs)
