"""
Health Check Commands.

Commands for checking the notes API.
"""

import asyncio

import typer
from rich.panel import Panel

from scribe.cli.render import console
from scribe.client.gateway import NotesClient, RequestFailed

app = typer.Typer(help="Health check commands")


@app.command()
def status(ctx: typer.Context) -> None:
    """
    Check that the notes API is up.

    Examples:
        scribe health status
        scribe --api-url http://localhost:4000 health status
    """
    api_url = (ctx.obj or {}).get("api_url")
    asyncio.run(_status(api_url))


async def _status(api_url: str | None) -> None:
    async with NotesClient(base_url=api_url) as client:
        try:
            data = await client.health()
        except RequestFailed as e:
            console.print(Panel(f"[red]DOWN[/red]\n[dim]{e.message}[/dim]", title="Backend Status"))
            raise typer.Exit(1)

    ok = bool(data and data.get("ok"))
    color = "green" if ok else "red"
    label = "OK" if ok else "UNHEALTHY"
    console.print(Panel(f"[{color}]{label}[/{color}]\n[dim]{client.base_url}[/dim]", title="Backend Status"))
    if not ok:
        raise typer.Exit(1)
