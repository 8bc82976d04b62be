"""Handlers for the `argot.yaml` demo. Run `python -m argot push v1.2 --env eu`."""
import asyncio

state = {"env": "staging", "force": False}


def select_env(env: str):
    state["env"] = env


def force():
    state["force"] = True


def status():
    print(f"Everything is green in {state['env']}.")


async def push(release: str):
    if not state["force"]:
        print(f"Pushing {release} to {state['env']} (use --force to skip checks)")
        await asyncio.sleep(0.5)
    print(f"Pushed {release} to {state['env']}.")
    return release
