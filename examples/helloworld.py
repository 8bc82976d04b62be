import time

from argot import Argot
from argot.utils import setup_logging

setup_logging()

app = Argot("helloworld", help_banner="Usage: python helloworld.py")


def greet(someone: str) -> None:
    text = f"Hello {someone}!"
    if app.context and app.context.extra.get("shout"):
        text = text.upper()
    app.puts(text)


# Greet the whole world per default
@app.default(description="Greet the whole world")
def world():
    greet("World")


# Ask for a name and greet it
@app.command("interactive", description="Ask for your name and greet you")
async def interactive():
    name = await app.input("Please enter your name")
    greet(name)


# Sleep while displaying a throbber
@app.command("throbber", description="Greet slowly, with a throbber")
async def throbber():
    app.put("Greeting the whole world takes some time... ")
    await app.throbber(time.sleep, 5)
    app.puts("done.")


# Show a progress bar while iterating through a loop
@app.command("progress", description="Greet the world with a progress bar")
def progress():
    app.put("Watch my progress while I greet the world: ")
    steps = 1_000_000
    with app.progress_bar(maximum=steps, size=30, char="+") as bar:
        for _ in range(steps):
            bar += 1


@app.command("repeat", description="Greet someone several times")
def repeat(someone: str, times: int = 2):
    for _ in range(times):
        greet(someone)


@app.flag("shout", description="Greet loudly")
def shout():
    app.context.extra["shout"] = True


@app.action("version", description="Print the version and exit")
def version():
    return "helloworld 1.0"


if __name__ == "__main__":
    results = app.main()
    if results and results[0]:
        app.puts(results[0])
