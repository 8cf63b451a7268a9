"""Tests for correlation ID context management."""

import asyncio

import pytest

from discuss_digest.observability.context import (
    set_correlation_id,
    get_correlation_id,
    clear_correlation_id,
    correlation_id_context,
)


def test_generates_id_when_none_provided():
    clear_correlation_id()

    result = set_correlation_id()

    assert len(result) == 12
    assert get_correlation_id() == result
    clear_correlation_id()


def test_uses_provided_id():
    set_correlation_id("custom")
    assert get_correlation_id() == "custom"
    clear_correlation_id()
    assert get_correlation_id() is None


def test_context_restores_previous_value():
    set_correlation_id("outer")

    with correlation_id_context("inner") as corr_id:
        assert corr_id == "inner"
        assert get_correlation_id() == "inner"

    assert get_correlation_id() == "outer"
    clear_correlation_id()


def test_context_restores_after_exception():
    clear_correlation_id()

    with pytest.raises(RuntimeError):
        with correlation_id_context("boom"):
            raise RuntimeError("fail")

    assert get_correlation_id() is None


@pytest.mark.asyncio
async def test_isolated_between_tasks():
    async def worker(name):
        with correlation_id_context(name):
            await asyncio.sleep(0)
            return get_correlation_id()

    results = await asyncio.gather(worker("a"), worker("b"))

    assert results == ["a", "b"]
