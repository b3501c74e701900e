"""CLI entrypoint: Typer app definition and command registration"""

import typer

from webx.cli.commands import (
    decode_cmd, encode_cmd, hash_cmd, init_cmd, list_cmd, metrics_cmd, save_cmd, seed_cmd,
)


app = typer.Typer(name="webx", no_args_is_help=True, help="Encode page blueprints into URL-safe WebX payloads")

app.command(name="encode")(encode_cmd)
app.command(name="decode")(decode_cmd)
app.command(name="hash")(hash_cmd)
app.command(name="metrics")(metrics_cmd)
app.command(name="init")(init_cmd)
app.command(name="save")(save_cmd)
app.command(name="list")(list_cmd)
app.command(name="seed")(seed_cmd)
