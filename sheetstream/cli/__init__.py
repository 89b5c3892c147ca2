import click

from .commands.batches import batches_command
from .commands.normalize import normalize_command
from .commands.read import read_command


@click.group()
def app() -> None:
    pass


app.add_command(read_command, name="read")
app.add_command(batches_command, name="batches")
app.add_command(normalize_command, name="normalize")
__all__ = ["app"]
