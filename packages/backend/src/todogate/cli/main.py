"""todogate CLI — talk to a running todogate server.

Usage:
    todogate health                              # Server + database status
    todogate register alice --password s3cret    # Create an account
    todogate login alice --password s3cret       # Print a bearer token
    export TODOGATE_TOKEN=<token>
    todogate items                               # List items
    todogate add "buy milk"                      # Create an item
    todogate done 3                              # Mark item 3 complete
    todogate rename 3 "buy oat milk"             # Rename item 3
    todogate rm 3                                # Delete item 3
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import os
import sys
from typing import Optional

import click
import httpx

from todogate import __version__

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:8000"


def _api_url() -> str:
    return os.environ.get("TODOGATE_API_URL", DEFAULT_API_URL).rstrip("/")


def _client(token: Optional[str] = None) -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the todogate server."""
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    return httpx.AsyncClient(base_url=_api_url(), timeout=30.0, headers=headers)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from a synchronous Click handler.

    Offloads to a thread when a loop is already running (e.g. tests).
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _require_token(token: Optional[str]) -> str:
    tok = token or os.environ.get("TODOGATE_TOKEN")
    if not tok:
        click.secho(
            "Error: --token required (or set TODOGATE_TOKEN env var). "
            "Get one with: todogate login NAME",
            fg="red",
            err=True,
        )
        sys.exit(1)
    return tok


def _check(r: httpx.Response) -> httpx.Response:
    """Exit with the server's error detail on a non-2xx response."""
    if r.is_success:
        return r
    try:
        detail = r.json().get("detail", r.text)
    except ValueError:
        detail = r.text
    click.secho(f"Error {r.status_code}: {detail}", fg="red", err=True)
    sys.exit(1)


def _print_item(item: dict) -> None:
    mark = click.style("[x]", fg="green") if item["isComplete"] else "[ ]"
    click.echo(f"{mark} {str(item['id']).rjust(4)}  {item.get('name') or ''}")


token_option = click.option(
    "--token", envvar="TODOGATE_TOKEN", help="Bearer token (or set TODOGATE_TOKEN)"
)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="todogate")
def main():
    """todogate — a task list behind bearer-token auth."""


@main.command()
def health():
    """Show server and database status."""

    async def _impl():
        async with _client() as c:
            data = _check(await c.get("/api/health")).json()
        color = "green" if data["status"] == "healthy" else "yellow"
        click.secho(f"Status:   {data['status']}", fg=color)
        click.echo(f"Version:  {data['version']}")
        click.echo(f"Database: {data['database']}")
        click.echo(f"Redis:    {data['redis']}")

    _run(_impl())


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


@main.command()
@click.argument("name")
@click.password_option()
def register(name: str, password: str):
    """Create an account."""

    async def _impl():
        async with _client() as c:
            r = _check(await c.post("/api/register", json={"name": name, "password": password}))
        click.secho(r.json()["message"], fg="green")

    _run(_impl())


@main.command()
@click.argument("name")
@click.option("--password", prompt=True, hide_input=True)
def login(name: str, password: str):
    """Log in and print a bearer token."""

    async def _impl():
        async with _client() as c:
            r = _check(await c.post("/api/login", json={"name": name, "password": password}))
        click.echo(r.json()["token"])

    _run(_impl())


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------


@main.command()
@token_option
def items(token: Optional[str]):
    """List all items."""
    tok = _require_token(token)

    async def _impl():
        async with _client(tok) as c:
            data = _check(await c.get("/api/items")).json()
        if not data:
            click.echo("No items.")
        for item in data:
            _print_item(item)

    _run(_impl())


@main.command()
@click.argument("name")
@token_option
def add(name: str, token: Optional[str]):
    """Create an item."""
    tok = _require_token(token)

    async def _impl():
        async with _client(tok) as c:
            r = _check(await c.post("/api/items", json={"name": name, "isComplete": False}))
        _print_item(r.json())

    _run(_impl())


async def _overwrite(tok: str, item_id: int, name: Optional[str], done: Optional[bool]):
    """Fetch an item and PUT it back with the given fields replaced."""
    async with _client(tok) as c:
        item = _check(await c.get(f"/api/items/{item_id}")).json()
        body = {
            "name": item.get("name") if name is None else name,
            "isComplete": item["isComplete"] if done is None else done,
        }
        _check(await c.put(f"/api/items/{item_id}", json=body))
        return {"id": item_id, **body}


@main.command()
@click.argument("item_id", type=int)
@click.option("--undo", is_flag=True, help="Mark as not complete instead")
@token_option
def done(item_id: int, undo: bool, token: Optional[str]):
    """Mark an item complete."""
    tok = _require_token(token)
    _print_item(_run(_overwrite(tok, item_id, None, not undo)))


@main.command()
@click.argument("item_id", type=int)
@click.argument("name")
@token_option
def rename(item_id: int, name: str, token: Optional[str]):
    """Rename an item."""
    tok = _require_token(token)
    _print_item(_run(_overwrite(tok, item_id, name, None)))


@main.command()
@click.argument("item_id", type=int)
@token_option
def rm(item_id: int, token: Optional[str]):
    """Delete an item."""
    tok = _require_token(token)

    async def _impl():
        async with _client(tok) as c:
            _check(await c.delete(f"/api/items/{item_id}"))
        click.echo(f"Deleted item {item_id}")

    _run(_impl())


if __name__ == "__main__":
    main()
