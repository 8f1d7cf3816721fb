import pytest

from chatmux.context import Context
from chatmux.middleware import MiddlewareChain

from conftest import FakeChatClient, make_message


def _ctx():
    return Context(
        prefix="!",
        command="echo",
        arguments=["a", "b"],
        client=FakeChatClient(),
        message=make_message("!echo a b"),
    )


def test_chain_runs_in_registration_order():
    chain = MiddlewareChain()
    seen = []
    chain.add(lambda ctx: seen.append("first"))
    chain.add(lambda ctx: seen.append("second"))

    chain.run(_ctx())

    assert seen == ["first", "second"]
    assert len(chain) == 2


def test_middleware_can_annotate_context():
    chain = MiddlewareChain()

    def upper(ctx):
        ctx.arguments = [arg.upper() for arg in ctx.arguments]
        ctx.extras["seen"] = True

    chain.add(upper)
    ctx = _ctx()
    chain.run(ctx)

    assert ctx.arguments == ["A", "B"]
    assert ctx.extras == {"seen": True}


def test_rejects_non_callables():
    with pytest.raises(TypeError):
        MiddlewareChain().add("not callable")
