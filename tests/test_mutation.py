"""
tests.test_mutation

Mutation lifecycle.
"""

from __future__ import annotations

import asyncio

import pytest

from fetchstate.context import DefaultFunctionContext
from fetchstate.factory import QueryFactory
from fetchstate.results import Failed, Ok
from fetchstate.status import Status


def test_mutation_is_idle_before_it_is_executed(factory: QueryFactory) -> None:
    async def save(payload: dict, context: DefaultFunctionContext) -> None:
        raise AssertionError("mutation function must not run")

    mutation = factory.create_mutation(save)

    assert mutation.is_idle
    assert mutation.status is Status.IDLE
    assert mutation.error is None


@pytest.mark.asyncio
async def test_mutation_succeeds_and_runs_every_time(factory: QueryFactory) -> None:
    saved: list[dict] = []

    async def save(payload: dict, context: DefaultFunctionContext) -> None:
        saved.append(payload)

    mutation = factory.create_mutation(save)
    first = await mutation.execute({"name": "a"})
    second = await mutation.execute({"name": "a"})

    assert mutation.is_success
    assert mutation.error is None
    assert first == second == Ok(None)
    assert saved == [{"name": "a"}, {"name": "a"}]


@pytest.mark.asyncio
async def test_mutation_fails_when_function_sets_error_message(factory: QueryFactory) -> None:
    async def save(payload: dict, context: DefaultFunctionContext) -> None:
        context.error_message = "name already taken"

    mutation = factory.create_mutation(save)
    outcome = await mutation.execute({"name": "dup"})

    assert mutation.is_error
    assert mutation.error is not None
    assert mutation.error.message == "name already taken"
    assert isinstance(outcome, Failed)


@pytest.mark.asyncio
async def test_mutation_fails_when_function_raises(factory: QueryFactory) -> None:
    async def save(payload: dict, context: DefaultFunctionContext) -> None:
        raise PermissionError("boom")

    mutation = factory.create_mutation(save)
    await mutation.execute({})

    assert mutation.status is Status.ERROR
    assert mutation.error is not None
    assert mutation.error.message == "boom"


@pytest.mark.asyncio
async def test_error_message_does_not_leak_into_next_execution(factory: QueryFactory) -> None:
    async def save(payload: dict, context: DefaultFunctionContext) -> None:
        if payload.get("fail"):
            context.error_message = "rejected"

    mutation = factory.create_mutation(save)
    await mutation.execute({"fail": True})
    await mutation.execute({"fail": False})

    assert mutation.is_success
    assert mutation.error is None


@pytest.mark.asyncio
async def test_concurrent_executions_get_separate_contexts(factory: QueryFactory) -> None:
    contexts: list[DefaultFunctionContext] = []
    both_started = asyncio.Barrier(2)

    async def save(payload: dict, context: DefaultFunctionContext) -> None:
        contexts.append(context)
        if payload["fail"]:
            context.error_message = "rejected"
        await both_started.wait()

    first = factory.create_mutation(save)
    second = factory.create_mutation(save)
    failed, succeeded = await asyncio.gather(
        first.execute({"fail": True}),
        second.execute({"fail": False}),
    )

    assert contexts[0] is not contexts[1]
    assert isinstance(failed, Failed)
    assert succeeded == Ok(None)
    assert first.is_error
    assert second.is_success


@pytest.mark.asyncio
async def test_mutation_can_call_upstream_over_http(factory: QueryFactory) -> None:
    async def greet(name: str, context: DefaultFunctionContext) -> None:
        response = await context.http.get(f"/greetings/{name}")
        if response.json()["text"] != f"hello {name}":
            context.error_message = "unexpected greeting"

    mutation = factory.create_mutation(greet)
    await mutation.execute("ada")

    assert mutation.is_success


# --- Module Notes -----------------------------------------------------------
# Mutations have no cache; repeated identical inputs always reach the function.
