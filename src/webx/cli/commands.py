"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from sqlmodel import Session, SQLModel

from webx.config import Settings, load_config
from webx.core.codec import create_url, encode, ensure_blueprint, parse_url, payload_metrics
from webx.core.errors import WebXError
from webx.core.utils.hashing import content_hash
from webx.crud.blueprints import get_all, get_by_category, get_featured, save_blueprint, search, seed_samples
from webx.crud.database import init_db, make_engine


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and apply the log level."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _read_json(path: str) -> Any:
    """Load a blueprint JSON file, exiting with an error if it cannot be read."""
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError, RecursionError) as e:
        _fail(f"Cannot read blueprint from {path}", e)


def encode_cmd(
    path: Annotated[str, typer.Argument(help="Blueprint JSON file")],
    compress: Annotated[Optional[bool], typer.Option("--compress/--no-compress", help="Gzip before base62")] = None,
    url: Annotated[bool, typer.Option("--url", help="Print a full webx:// link")] = False,
    ):
    """Encode a blueprint JSON file into a URL-safe payload."""
    settings = _settings(overrides={"compress": compress})
    doc = _read_json(path)
    try:
        if url:
            typer.echo(create_url(doc, compress=settings.compress, scheme=settings.url_scheme))
        else:
            typer.echo(encode(doc, compress=settings.compress))
    except WebXError as e:
        _fail("Encode failed", e)


def decode_cmd(
    payload: Annotated[str, typer.Argument(help="Encoded payload or webx:// link")],
    out: Annotated[Optional[str], typer.Option("--out", "-o", help="Write JSON here instead of stdout")] = None,
    ):
    """Decode a payload back into blueprint JSON."""
    settings = _settings()
    try:
        blueprint = parse_url(payload, scheme=settings.url_scheme)
    except WebXError as e:
        _fail("Decode failed", e)
    text = json.dumps(blueprint.to_wire(), indent=2, ensure_ascii=False)
    if out:
        Path(out).write_text(text + "\n", encoding="utf-8")
        typer.echo(f"Wrote {out}")
    else:
        typer.echo(text)


def hash_cmd(
    path: Annotated[str, typer.Argument(help="Blueprint JSON file")],
    ):
    """Print the 8-digit content hash of a blueprint (title, layout, data)."""
    _settings()
    try:
        result = content_hash(ensure_blueprint(_read_json(path)))
    except WebXError as e:
        _fail("Hash failed", e)
    if not result.available:
        _fail("Hash unavailable")
    typer.echo(str(result))


def metrics_cmd(
    path: Annotated[str, typer.Argument(help="Blueprint JSON file")],
    ):
    """Compare payload sizes for plain gzip and the full WebX pipeline."""
    _settings()
    try:
        m = payload_metrics(_read_json(path))
    except WebXError as e:
        _fail("Metrics failed", e)
    typer.echo(f"original:          {m.original_size} bytes")
    typer.echo(f"gzip:              {m.compressed_size} bytes")
    typer.echo(f"gzip+base64:       {m.base64_compressed_size} bytes ({m.compression_ratio}% smaller)")
    typer.echo(f"webx optimized:    {m.optimized_size} bytes ({m.advanced_ratio}% smaller)")


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        SQLModel.metadata.drop_all(engine)
        typer.echo("Existing data cleared.")
    init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")


def save_cmd(
    path: Annotated[str, typer.Argument(help="Blueprint JSON file")],
    compress: Annotated[Optional[bool], typer.Option("--compress/--no-compress", help="Gzip before base62")] = None,
    ):
    """Encode a blueprint and store it with its content hash."""
    settings = _settings(overrides={"compress": compress})
    doc = _read_json(path)
    engine = make_engine(settings.db_url)
    init_db(engine)
    try:
        with Session(engine) as session:
            row = save_blueprint(session, doc, compress=settings.compress)
            session.commit()
            typer.echo(f"Saved {row.id} hash={row.content_hash}")
    except WebXError as e:
        _fail("Save failed", e)


def list_cmd(
    category: Annotated[Optional[str], typer.Option("--category", help="Only this category")] = None,
    featured: Annotated[bool, typer.Option("--featured", help="Only featured blueprints")] = False,
    query: Annotated[Optional[str], typer.Option("--search", help="Match title, author or category")] = None,
    ):
    """List stored blueprints."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        if query:
            rows = search(session, query)
        elif category:
            rows = get_by_category(session, category)
        elif featured:
            rows = get_featured(session)
        else:
            rows = get_all(session)
        lines = [f"{r.id}  {r.content_hash}  {r.layout:<10}  {r.title}" for r in rows]
    if not lines:
        typer.echo("No blueprints found.")
        raise typer.Exit(1)
    for line in lines:
        typer.echo(line)


def seed_cmd():
    """Insert the bundled sample blueprints into an empty database."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        count = seed_samples(session)
        session.commit()
    typer.echo(f"Seeded {count} blueprint(s)." if count else "Database already has blueprints; nothing seeded.")
