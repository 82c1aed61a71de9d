"""End-to-end traces: context attributes through real text and JSON handlers."""

from logctx import Attr, Context, ContextHandler, Logger, attrs, reset, with_attrs


def user_context():
    ctx = Context.background()
    # attributes attached to the context
    ctx = with_attrs(ctx, "user", "alice", Attr("age", 42))
    # more attributes attached later
    return with_attrs(ctx, "state", "good")


def test_context_handler_text(out, text_logger):
    logger = Logger(ContextHandler(text_logger.handler))
    logger.info("User logged in", "count", 7, ctx=user_context())

    assert out.getvalue() == 'level=INFO msg="User logged in" count=7 state=good user=alice age=42\n'


def test_attrs_without_context_handler(out, text_logger):
    ctx = user_context()
    text_logger.info("User logged in", *attrs(ctx, "count", 7), ctx=ctx)

    assert out.getvalue() == 'level=INFO msg="User logged in" count=7 state=good user=alice age=42\n'


def test_explicit_and_decorated_match(out, text_logger):
    ctx = with_attrs(Context.background(), "a", "A", "b", "B")
    ctx = with_attrs(ctx, "c", "C", Attr("d", "D"))
    ctx = with_attrs(ctx, Attr("e", "E"), Attr("f", 7))

    text_logger.info("User logged in", *attrs(ctx, "g", "G"))

    logger2 = Logger(ContextHandler(text_logger.handler))
    logger2.info("User logged in", "g", "G", ctx=ctx)

    line = 'level=INFO msg="User logged in" g=G e=E f=7 c=C d=D a=A b=B\n'
    assert out.getvalue() == line + line


def test_group_scoping_json(out, json_logger):
    ctx = user_context()

    # context attributes are emitted inside the open group
    json_logger.with_group("GROUP").info("User logged in", "count", 7, ctx=ctx)

    # binding them on the logger before the group keeps them outside
    json_logger.with_attrs(*attrs(ctx)).with_group("GROUP").info(
        "User logged in", "count", 7, ctx=reset(ctx)
    )

    assert out.getvalue().splitlines() == [
        '{"level":"INFO","msg":"User logged in","GROUP":{"count":7,"state":"good","user":"alice","age":42}}',
        '{"level":"INFO","msg":"User logged in","state":"good","user":"alice","age":42,"GROUP":{"count":7}}',
    ]
