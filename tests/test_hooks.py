import asyncio

import pytest

from seedforge import HookContinuationError, HookError
from seedforge.hooks import HookTable, continuation, legacy_post_save


class TestHookTable:

    def test_add_keeps_registration_order(self):
        table = HookTable()
        first, second = (lambda: None), (lambda: None)
        table.add("pre:save", first)
        table.add("pre:save", second)
        assert table.callbacks("pre:save") == [first, second]

    def test_events_in_first_registration_order(self):
        table = HookTable()
        table.add("post:save", print)
        table.add("custom", print)
        table.add("post:save", repr)
        assert table.events() == ["post:save", "custom"]
        assert len(table) == 3

    def test_callbacks_returns_copy(self):
        table = HookTable()
        table.add("x", print)
        table.callbacks("x").append(repr)
        assert table.callbacks("x") == [print]

    def test_contains(self):
        table = HookTable()
        table.add("x", print)
        assert "x" in table
        assert "y" not in table

    def test_rejects_non_callable(self):
        with pytest.raises(TypeError):
            HookTable().add("x", "not callable")

    @pytest.mark.asyncio
    async def test_emit_runs_in_order_with_arguments(self):
        table = HookTable()
        calls = []

        async def first(obj):
            await asyncio.sleep(0)
            calls.append(("first", obj))

        def second(obj):
            calls.append(("second", obj))

        table.add("pre:save", first)
        table.add("pre:save", second)
        await table.emit("pre:save", "instance")

        assert calls == [("first", "instance"), ("second", "instance")]

    @pytest.mark.asyncio
    async def test_empty_chain_completes(self):
        await HookTable().emit("nothing")

    @pytest.mark.asyncio
    async def test_error_aborts_rest_of_chain(self):
        table = HookTable()
        error = ValueError("veto")
        calls = []

        async def failing():
            calls.append("failing")
            raise error

        table.add("pre:build", failing)
        table.add("pre:build", lambda: calls.append("after"))

        with pytest.raises(ValueError) as exc_info:
            await table.emit("pre:build")

        assert exc_info.value is error
        assert calls == ["failing"]

    @pytest.mark.asyncio
    async def test_stage_waits_for_previous_stage(self):
        table = HookTable()
        order = []

        async def slow():
            order.append("slow:start")
            await asyncio.sleep(0.01)
            order.append("slow:end")

        async def fast():
            order.append("fast")

        table.add("e", slow)
        table.add("e", fast)
        await table.emit("e")

        assert order == ["slow:start", "slow:end", "fast"]

    @pytest.mark.asyncio
    async def test_hooks_added_during_emit_run_next_time(self):
        table = HookTable()
        calls = []

        def adder():
            calls.append("adder")
            table.add("e", lambda: calls.append("late"))

        table.add("e", adder)
        await table.emit("e")
        assert calls == ["adder"]

    @pytest.mark.asyncio
    async def test_failure_is_logged(self, events):
        table = HookTable()

        def failing():
            raise KeyError("boom")

        table.add("pre:save", failing)
        with pytest.raises(KeyError):
            await table.emit("pre:save")

        (failed,) = events("hook_chain_failed")
        assert failed["event_key"] == "pre:save"
        assert failed["position"] == 0
        assert failed["error_type"] == "KeyError"


class TestContinuation:

    @pytest.mark.asyncio
    async def test_next_continues_chain(self):
        table = HookTable()
        calls = []

        def legacy(obj, next_):
            calls.append(obj)
            next_()

        table.add("e", continuation(legacy))
        table.add("e", lambda obj: calls.append("next stage"))
        await table.emit("e", "obj")

        assert calls == ["obj", "next stage"]

    @pytest.mark.asyncio
    async def test_next_with_error_aborts(self):
        table = HookTable()
        error = RuntimeError("nope")
        table.add("e", continuation(lambda next_: next_(error)))
        table.add("e", lambda: pytest.fail("should not run"))

        with pytest.raises(RuntimeError) as exc_info:
            await table.emit("e")
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_non_exception_error_is_wrapped(self):
        stage = continuation(lambda next_: next_("bad input"))

        with pytest.raises(HookError) as exc_info:
            await stage()
        assert exc_info.value.error == "bad input"
        assert str(exc_info.value) == "bad input"

    @pytest.mark.asyncio
    async def test_waits_for_deferred_next(self):
        order = []

        def deferred(next_):
            def resume():
                order.append("resumed")
                next_()

            asyncio.get_running_loop().call_later(0.01, resume)

        await continuation(deferred)()
        order.append("done")
        assert order == ["resumed", "done"]

    @pytest.mark.asyncio
    async def test_calling_next_twice_raises(self):
        def twice(next_):
            next_()
            next_()

        with pytest.raises(HookContinuationError):
            await continuation(twice)()

    @pytest.mark.asyncio
    async def test_legacy_post_save_drops_instance(self):
        received = []

        def old_style(*args):
            received.append(args)
            args[0]()

        await legacy_post_save(old_style)("instance")

        assert len(received) == 1
        assert len(received[0]) == 1
        assert callable(received[0][0])
