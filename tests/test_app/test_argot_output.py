import asyncio
import time
from io import StringIO

import pytest

from argot import Argot
from argot.progress_bar import ProgressBar
from argot.throbber import Throbber


# --- Fixtures ---
@pytest.fixture
def output():
    return StringIO()


def make_app(output, text="", **options):
    return Argot("output", ostream=output, istream=StringIO(text), **options)


# --- Tests ---
@pytest.mark.asyncio
async def test_put_puts_putc(output):
    app = make_app(output, raise_errors=True)

    @app.command("output")
    def write(text: str):
        app.puts(text)
        app.put(text)
        app.putc(text)
        app.putc(33)

    await app.run(["output", "test"])
    assert output.getvalue() == "test\ntestt!"


@pytest.mark.asyncio
async def test_input(output):
    app = make_app(output, "Ada\n", raise_errors=True)

    @app.command("input")
    async def ask():
        return await app.input("input")

    assert await app.run(["input"]) == ["Ada"]
    assert output.getvalue() == "input: "


@pytest.mark.asyncio
async def test_input_exhausted(output):
    app = make_app(output, raise_errors=True)
    with pytest.raises(EOFError):
        await app.input("name")


@pytest.mark.asyncio
async def test_confirm_retries_invalid_answers(output):
    app = make_app(output, "maybe\nn\n")

    assert await app.confirm("Deploy?") is False
    assert output.getvalue().count("Deploy? [Y/n] ") == 2
    assert "Enter 'Y' or 'n'." in output.getvalue()


@pytest.mark.asyncio
async def test_confirm_yes(output):
    app = make_app(output, "y\n")
    assert await app.confirm() is True


def test_hidden_output(output):
    app = make_app(output)

    with app.hidden_output() as real:
        app.puts("later")
        real.write("now\n")
        assert output.getvalue() == "now\n"

    assert output.getvalue() == "now\nlater\n"
    assert app.ostream is output


def test_hidden_output_restores_on_error(output):
    app = make_app(output)

    with pytest.raises(RuntimeError):
        with app.hidden_output():
            app.put("partial")
            raise RuntimeError("boom")

    assert app.ostream is output
    assert output.getvalue() == "partial"


def test_progress_bar(output):
    app = make_app(output)

    with app.progress_bar(maximum=10, size=5, char="+") as bar:
        for _ in range(10):
            bar += 1

    assert output.getvalue() == "+++++\n"


def test_progress_bar_overshoot_and_start(output):
    bar = ProgressBar(output, maximum=4, size=8, start=1)
    assert output.getvalue() == "##"
    bar.increment(10)
    bar.increment(1)
    assert output.getvalue() == "########\n"
    assert bar.finished


@pytest.mark.parametrize(
    "kwargs", [{"maximum": 0}, {"size": 0}, {"char": "ab"}, {"char": ""}]
)
def test_progress_bar_validation(output, kwargs):
    with pytest.raises(ValueError):
        ProgressBar(output, **kwargs)


@pytest.mark.asyncio
async def test_throbber_with_coroutine(output):
    async def work(value):
        await asyncio.sleep(0.05)
        return value * 2

    throbber = Throbber(output, interval=0.01)
    assert await throbber.run(work, 21) == 42

    written = output.getvalue()
    assert throbber.ticks >= 1
    assert written.startswith(" \b-")
    assert written.endswith("\b")
    assert written.count("\b") == throbber.ticks + 1


@pytest.mark.asyncio
async def test_throbber_with_blocking_callable(output):
    throbber = Throbber(output, interval=0.01)
    assert await throbber.run(lambda: time.sleep(0.05) or "done") == "done"
    assert throbber.ticks >= 1


@pytest.mark.asyncio
async def test_throbber_propagates_errors(output):
    async def work():
        await asyncio.sleep(0.02)
        raise RuntimeError("failed")

    throbber = Throbber(output, interval=0.01)
    with pytest.raises(RuntimeError):
        await throbber.run(work)
    assert output.getvalue().endswith("\b")


def test_throbber_frames():
    assert Throbber(StringIO()).frames == ["-", "\\", "|", "/"]


@pytest.mark.asyncio
async def test_app_throbber(output):
    app = make_app(output, raise_errors=True)

    @app.command("throbber")
    async def spin():
        return await app.throbber(asyncio.sleep, 0.01, "slept")

    assert await app.run(["throbber"]) == ["slept"]
    assert output.getvalue().startswith(" ")
    assert output.getvalue().endswith("\b")


@pytest.mark.asyncio
async def test_help_screen(output):
    app = make_app(output, raise_errors=True, help_banner="Usage: greeter")
    app.add_flag("force", description="Force it")
    app.add_option("level", arity=1)
    app.add_command("copy", lambda source, target: None, description="Copy a file")
    app.add_command("secret", lambda: None, description="Hidden", hidden=True)

    assert await app.run([]) == [None]

    text = output.getvalue()
    assert text.startswith(
        "Usage: greeter [--debug|-d] [--force|-f] [--level|-l ...] "
        "[--verbose|-v] [command] [args]\n"
    )
    assert "Without command: Display this help screen" in text
    assert "Commands:" in text
    assert "copy" in text and "Copy a file" in text
    assert "help" in text
    assert "secret" not in text


@pytest.mark.asyncio
async def test_help_without_default(output):
    app = make_app(output, raise_errors=True, help_as_default=False)
    app.add_command("copy", lambda source, target: None, description="Copy a file")

    await app.run(["help"])

    text = output.getvalue()
    assert " command [args]" in text
    assert "Without command" not in text


@pytest.mark.asyncio
async def test_errors_are_rendered(output):
    app = make_app(output)

    with pytest.raises(SystemExit) as excinfo:
        await app.run(["nope"])

    assert excinfo.value.code == 1
    assert output.getvalue() == "Error:\n    Unknown command: nope\n"
    assert not app.commands["help"].active


@pytest.mark.asyncio
async def test_errors_with_debug_print_traceback(output):
    app = make_app(output)
    app.add_command("fail", lambda: 1 / 0)

    with pytest.raises(SystemExit):
        await app.run(["fail", "--debug"])

    text = output.getvalue()
    assert text.startswith("Error:\n    division by zero\n")
    assert "Traceback" in text
    assert "ZeroDivisionError" in text


@pytest.mark.asyncio
async def test_failing_error_hook_still_renders(output):
    app = make_app(output)

    def broken(context):
        raise RuntimeError("hook failed")

    app.register_hook("error", broken)

    with pytest.raises(SystemExit):
        await app.run(["--nope"])
    assert output.getvalue() == "Error:\n    Unknown option: --nope\n"
