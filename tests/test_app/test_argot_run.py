from io import StringIO

import pytest

from argot import Argot, Flag, HookType, Option, ParamType
from argot.exceptions import (
    ArgumentTypeError,
    ArityError,
    BlockMissingError,
    CommandAlreadyExistsError,
    MissingArgumentError,
    NoDefaultCommandError,
    ParameterAlreadyExistsError,
    UnknownCommandError,
    UnknownOptionError,
    UnknownParameterError,
)


# --- Fixtures ---
@pytest.fixture
def output():
    return StringIO()


@pytest.fixture
def app(output):
    app = Argot("test app", raise_errors=True, ostream=output, istream=StringIO())

    @app.default()
    def default():
        return "default action"

    @app.action("required")
    def required(what):
        return f"required argument was {what}"

    @app.command("noarg")
    def noarg():
        return "noarg action"

    @app.command("copy", description="Copy a file")
    def copy(source, target):
        return f"{source}->{target}"

    @app.command("number_string", param_type=[ParamType.INT, ParamType.STR])
    def number_string(n, s):
        return (n, s)

    return app


# --- Tests ---
@pytest.mark.asyncio
async def test_default_command(app):
    assert await app.run([]) == ["default action"]
    assert app.last_context.command.name == "__default"
    assert app.last_context.parameters == []


@pytest.mark.asyncio
async def test_standalone_action(app):
    assert await app.run(["--required", "arg"]) == ["required argument was arg"]


@pytest.mark.asyncio
async def test_standalone_action_missing_argument(app):
    with pytest.raises(MissingArgumentError):
        await app.run(["--required"])


@pytest.mark.asyncio
async def test_standalone_action_leftover_arguments(app):
    with pytest.raises(ArityError) as excinfo:
        await app.run(["--required", "arg", "extra"])
    assert excinfo.value.name == "required"
    assert excinfo.value.maximum == 1
    assert excinfo.value.given == 2


@pytest.mark.asyncio
async def test_standalone_action_with_explicit_command(app):
    results = await app.run(["noarg", "--required", "arg"])
    assert results == ["required argument was arg", "noarg action"]


@pytest.mark.asyncio
async def test_unknown_option(app):
    with pytest.raises(UnknownOptionError):
        await app.run(["--unknown"])


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "tokens",
    [
        ["--bogus", "copy", "a", "b"],
        ["copy", "--bogus", "a", "b"],
        ["copy", "a", "b", "--bogus"],
        ["-z"],
    ],
)
async def test_unknown_option_in_any_position(app, tokens):
    with pytest.raises(UnknownParameterError):
        await app.run(tokens)


@pytest.mark.asyncio
async def test_command_arity(app):
    with pytest.raises(MissingArgumentError):
        await app.run(["copy", "a"])
    assert await app.run(["copy", "a", "b"]) == ["a->b"]
    with pytest.raises(ArityError):
        await app.run(["copy", "a", "b", "c"])


@pytest.mark.asyncio
async def test_typed_arguments(app):
    assert await app.run(["number_string", "6", "6"]) == [(6, "6")]
    with pytest.raises(ArgumentTypeError):
        await app.run(["number_string", "abc", "6"])


@pytest.mark.asyncio
async def test_unknown_command(app):
    with pytest.raises(UnknownCommandError):
        await app.run(["nope"])


@pytest.mark.asyncio
async def test_unknown_command_passed_to_default_with_arguments(output):
    app = Argot("greeter", raise_errors=True, ostream=output)
    app.add_default(lambda *names: "Hello " + " and ".join(names))

    assert await app.run(["Ada", "Grace"]) == ["Hello Ada and Grace"]


@pytest.mark.asyncio
async def test_no_default_command(output):
    app = Argot("bare", raise_errors=True, ostream=output, include_help_command=False)
    app.add_command("hello", lambda: "hello")

    with pytest.raises(NoDefaultCommandError):
        await app.run([])
    assert await app.run(["hello"]) == ["hello"]


@pytest.mark.asyncio
async def test_repeated_runs_are_identical(app):
    first = await app.run(["--required", "arg"])
    second = await app.run(["--required", "arg"])
    assert first == second

    units = [*app.commands.values(), *app.global_parameters.values()]
    assert all(not unit.active for unit in units)
    assert all(unit.result is None for unit in units)
    assert app.global_parameters["required"].args == []


@pytest.mark.asyncio
async def test_reset_after_failure(app):
    with pytest.raises(ArityError):
        await app.run(["copy", "a", "b", "c"])

    assert app.commands["copy"].arguments == []
    assert not app.commands["copy"].active
    assert await app.run(["copy", "x", "y"]) == ["x->y"]


@pytest.mark.asyncio
async def test_alias_activation_runs_block_once(output):
    calls = []
    app = Argot("aliases", raise_errors=True, ostream=output)
    app.add_flag("force", lambda: calls.append("force"), aliases=["F"])
    app.add_command("noop", lambda: "noop")

    assert await app.run(["noop", "--force", "-F", "-f"]) == ["noop"]
    assert calls == ["force"]

    await app.run(["noop", "-F"])
    assert calls == ["force", "force"]


@pytest.mark.asyncio
async def test_aliases_are_resolved_lazily(output):
    app = Argot("lazy", raise_errors=True, ostream=output)
    app.add_alias("cp", "copy")
    app.add_alias("cp", "other")
    app.add_command("copy", lambda source, target: "copied")

    assert await app.run(["cp", "a", "b"]) == ["copied"]
    assert app.aliases == {}
    assert app.commands["cp"] is app.commands["copy"]
    assert "cp" in app.commands["copy"].aliases


@pytest.mark.asyncio
async def test_alias_for_unknown_target(output):
    app = Argot("lazy", raise_errors=True, ostream=output)
    app.add_alias("x", "missing")
    with pytest.raises(UnknownParameterError):
        await app.run([])


@pytest.mark.asyncio
async def test_command_aliases(output):
    app = Argot("aliases", raise_errors=True, ostream=output)
    app.add_command("status", lambda: "ok", aliases=["st"])

    assert await app.run(["st"]) == ["ok"]
    assert await app.run(["status"]) == ["ok"]


def test_short_alias_for_global_parameters(output):
    app = Argot("aliases", ostream=output)
    app.add_flag("force")
    app.add_flag("fast")

    assert app.aliases == {"f": "force"}


def test_short_aliases_disabled(output):
    app = Argot("aliases", ostream=output, auto_short_aliases=False)
    app.add_flag("force")
    assert app.aliases == {}


def test_duplicate_registration(output):
    app = Argot("dupes", ostream=output)
    app.add_command("hello", lambda: None)
    app.add_flag("force")

    with pytest.raises(CommandAlreadyExistsError):
        app.add_command("hello", lambda: None)
    with pytest.raises(ParameterAlreadyExistsError):
        app.add_parameter(Flag(name="force"))


def test_command_without_code(output):
    app = Argot("missing", ostream=output)
    with pytest.raises(BlockMissingError):
        app.add_command("ghost")


def test_declared_arguments_must_fit_block(output):
    app = Argot("mismatch", ostream=output)
    with pytest.raises(ValueError):
        app.add_command("one", lambda a: a, arity=(1, 3))
    with pytest.raises(ValueError):
        app.add_action("pair", lambda a: a, param_type=[int, int])
    assert "one" not in app.commands
    assert "pair" not in app.global_parameters


@pytest.mark.asyncio
async def test_global_option_with_command(output):
    levels = []
    app = Argot("levels", raise_errors=True, ostream=output)
    app.add_option("level", levels.append, param_type=int)
    app.add_command("noop", lambda: "noop")

    assert await app.run(["noop", "--level", "3"]) == ["noop"]
    assert levels == [3]


@pytest.mark.asyncio
async def test_command_local_parameters(output):
    seen = {}
    app = Argot("deploy", raise_errors=True, ostream=output)
    app.add_command(
        "deploy",
        lambda target: f"deploy {target} force={seen.get('force', False)} tag={seen.get('tag')}",
        parameters=[
            Flag(name="force", action=lambda: seen.update(force=True)),
            Option(name="tag", action=lambda tag: seen.update(tag=tag)),
        ],
    )

    assert await app.run(["deploy", "--force", "--tag", "v1", "prod"]) == [
        "deploy prod force=True tag=v1"
    ]
    assert await app.run(["deploy", "-f", "staging"]) == [
        "deploy staging force=True tag=v1"
    ]


@pytest.mark.asyncio
async def test_context_is_available_to_blocks(output):
    app = Argot("context", raise_errors=True, ostream=output)

    @app.command("greet")
    def greet(name):
        assert app.context.unit.name == "greet"
        return f"{app.context.get('name')} debug={app.context.debug}"

    assert await app.run(["greet", "Ada"]) == ["Ada debug=False"]
    assert await app.run(["greet", "Ada", "--debug"]) == ["Ada debug=True"]
    assert app.context is None
    assert app.last_context.debug


@pytest.mark.asyncio
async def test_verbose_flag(output):
    app = Argot("verbose", raise_errors=True, ostream=output)
    app.add_command("noop", lambda: None)

    await app.run(["noop", "-v"])
    assert app.last_context.verbose
    await app.run(["noop"])
    assert not app.last_context.verbose


@pytest.mark.asyncio
async def test_async_blocks(output):
    app = Argot("async", raise_errors=True, ostream=output)

    @app.command("double")
    async def double(value: int):
        return value * 2

    assert await app.run(["double", "21"]) == [42]


@pytest.mark.asyncio
async def test_hooks(output):
    events = []
    app = Argot("hooks", raise_errors=True, ostream=output)
    app.add_command("noop", lambda: "noop")
    app.add_command("fail", lambda: 1 / 0)

    app.register_hook(HookType.PRE_INIT, lambda ctx: events.append("pre_init"))
    app.register_hook(HookType.POST_INIT, lambda ctx: events.append("post_init"))
    app.register_hook("before", lambda ctx: events.append(f"before {ctx.command.name}"))
    app.register_hook("after", lambda ctx: events.append(f"after {ctx.results}"))

    async def on_error(ctx):
        events.append(f"error {type(ctx.exception).__name__}")

    app.register_hook(HookType.ON_ERROR, on_error)
    app.register_hook("teardown", lambda ctx: events.append(f"teardown {ctx.status}"))

    await app.run(["noop"])
    with pytest.raises(ZeroDivisionError):
        await app.run(["fail"])

    assert events == [
        "pre_init",
        "post_init",
        "before noop",
        "after ['noop']",
        "teardown OK",
        "before fail",
        "error ZeroDivisionError",
        "teardown ERROR",
    ]


def test_main_runs_synchronously(output):
    app = Argot("main", raise_errors=True, ostream=output)
    app.add_command("hello", lambda name: f"Hello {name}!")
    assert app.main(["hello", "Ada"]) == ["Hello Ada!"]


def test_set_validates_settings(output):
    app = Argot("settings", ostream=output)
    app.set("raise_errors", True)
    assert app.settings.raise_errors

    with pytest.raises(AttributeError):
        app.set("no_such_setting", 1)
    with pytest.raises(ValueError):
        app.set("ostream", object())
