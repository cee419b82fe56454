"""Typer CLI entrypoint for dex-catalog."""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import typer
import yaml
from rich import box
from rich.console import Console
from rich.table import Table

from .config import ApiConfig, ConfigRepository, GlobalConfig
from .engine.filters import get_category
from .engine.loader import LoadProgress
from .engine.records import Record
from .engine.segments import SEGMENTS, get_segment
from .errors import MalformedRecordError, NotFoundError, TransportError
from .logging_conf import available_logs, configure_logging, tail_log
from .session import CatalogSession, CatalogStatus, RecordDetail
from .ui import ProgressActivity, ProgressReporter
from .ui import labels

app = typer.Typer(
    help="Pokédex digital no terminal",
    no_args_is_help=True,
    rich_markup_mode=None,
)
config_app = typer.Typer(name="config", help="Configuração", no_args_is_help=True, rich_markup_mode=None)
log_app = typer.Typer(name="log", help="Logs", no_args_is_help=True, rich_markup_mode=None)

console = Console()


@dataclass
class AppState:
    repository: ConfigRepository
    config: GlobalConfig
    verbose: bool = False


def build_state(verbose: bool, config_path: Path | None = None) -> AppState:
    repository = ConfigRepository(path=config_path)
    config = repository.load_global_config()
    configure_logging(verbose=verbose, log_dir=config.log_dir)
    return AppState(repository=repository, config=config, verbose=verbose)


def _get_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if state is None:
        state = build_state(verbose=False)
        ctx.obj = state
    return state


def _progress_default_enabled() -> bool:
    return bool(getattr(sys.stdout, "isatty", lambda: False)())


# ----------------------------------------------------------------------
# Rendering
# ----------------------------------------------------------------------
def _render_records_table(records: Sequence[Record], max_rows: int) -> Table:
    shown = records[:max_rows] if max_rows > 0 else records
    title = f"Pokédex · {len(records)} encontrados"
    if len(shown) < len(records):
        title += f" (mostrando {len(shown)})"
    table = Table(title=title, box=box.SIMPLE_HEAD)
    table.add_column("Nº", style="bold", no_wrap=True)
    table.add_column("Nome", style="green")
    table.add_column("Tipos", style="magenta")
    table.add_column("Região", style="cyan")
    for record in shown:
        segment = record.segment
        table.add_row(
            labels.format_number(record.id),
            record.name.upper(),
            " / ".join(labels.type_label(name, short=True) for name in record.categories),
            segment.name if segment else "-",
        )
    return table


def _format_status(status: CatalogStatus) -> str:
    region = status.segment.name if status.segment else labels.ALL_SEGMENTS_LABEL
    category = labels.type_label(status.category) if status.category else labels.ALL_CATEGORIES_LABEL
    return f"Encontrados: {status.visible} · Região: {region} · Tipo: {category}"


def _stat_bar(base_stat: int, width: int = 20) -> str:
    filled = int(width * labels.stat_bar_percent(base_stat) / 100)
    return "█" * filled + "·" * (width - filled)


def _render_detail(detail: RecordDetail) -> Table:
    record = detail.record
    table = Table(
        title=f"{labels.display_name(record.name)} {labels.format_number(record.id)}",
        box=box.MINIMAL_DOUBLE_HEAD,
        show_header=False,
    )
    table.add_column("campo", style="dim")
    table.add_column("valor")
    table.add_row("Tipos", ", ".join(labels.type_label(name) for name in record.categories))
    table.add_row("Descrição", detail.description)
    height = labels.decimetres_to_metres(record.height)
    weight = labels.hectograms_to_kilograms(record.weight)
    table.add_row("Altura", f"{height}m" if height is not None else "-")
    table.add_row("Peso", f"{weight}kg" if weight is not None else "-")
    table.add_row("Experiência Base", str(record.base_experience or "-"))
    for stat in record.stats:
        table.add_row(labels.stat_label(stat.name), f"{stat.base_stat:>3} {_stat_bar(stat.base_stat)}")
    table.add_row(
        "Habilidades",
        ", ".join(labels.ability_label(ability.name, ability.is_hidden) for ability in record.abilities)
        or "-",
    )
    previous_id = CatalogSession.previous_id(record.id)
    next_id = CatalogSession.next_id(record.id)
    table.caption = " · ".join(
        part
        for part in (
            f"← {labels.format_number(previous_id)}" if previous_id else "",
            f"{labels.format_number(next_id)} →" if next_id else "",
        )
        if part
    )
    return table


# ----------------------------------------------------------------------
# Async drivers
# ----------------------------------------------------------------------
def _open_session(config: GlobalConfig) -> CatalogSession:
    return CatalogSession(config)


async def _browse(
    config: GlobalConfig,
    segment: Optional[str],
    category: Optional[str],
    search: Optional[str],
    progress: ProgressReporter | None,
) -> tuple[tuple[Record, ...], CatalogStatus, LoadProgress]:
    async with _open_session(config) as session:
        final = await session.load(progress=progress)
        if segment:
            session.change_segment(segment)
        if category:
            session.change_category(category)
        if search:
            session.search(search)
        return session.visible, session.status(), final


async def _detail(config: GlobalConfig, key: str | int) -> RecordDetail:
    async with _open_session(config) as session:
        return await session.detail(key)


def _show_detail(state: AppState, key: str | int) -> None:
    activity = ProgressActivity(enabled=_progress_default_enabled())
    activity.start("Carregando…")
    try:
        detail = asyncio.run(_detail(state.config, key))
    except NotFoundError:
        console.print("Pokémon não encontrado!", style="red")
        raise typer.Exit(code=1)
    except TransportError as exc:
        console.print(f"Erro na busca. Tente novamente. ({exc})", style="red")
        raise typer.Exit(code=2)
    except MalformedRecordError as exc:
        console.print(f"Resposta inválida do servidor: {exc}", style="red")
        raise typer.Exit(code=2)
    finally:
        activity.close()
    console.print(_render_detail(detail))


# ----------------------------------------------------------------------
# Commands
# ----------------------------------------------------------------------
@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Ativa logs de depuração"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Arquivo de configuração YAML/JSON"),
) -> None:
    try:
        ctx.obj = build_state(verbose=verbose, config_path=config_path)
    except (FileNotFoundError, ValueError) as exc:
        console.print(str(exc), style="red")
        raise typer.Exit(code=2)


@app.command("browse", help="Carrega o catálogo e lista os Pokémon filtrados.")
def browse(
    ctx: typer.Context,
    segment: Optional[str] = typer.Option(None, "--region", "-r", help="Região (kanto, johto, …)."),
    category: Optional[str] = typer.Option(None, "--type", "-t", help="Tipo (fire, water, …)."),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Nome ou número."),
    limit: Optional[int] = typer.Option(None, "--limit", help="Quantidade máxima a carregar."),
    quiet: bool = typer.Option(False, "--quiet", help="Sem barra de progresso."),
) -> None:
    state = _get_state(ctx)
    config = state.config
    if limit is not None:
        try:
            api = ApiConfig.model_validate({**config.api.model_dump(), "listing_limit": limit})
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--limit") from exc
        config = config.model_copy(update={"api": api})
    if segment and segment.strip().lower() not in ("none", "all") and get_segment(segment) is None:
        console.print(f"Região desconhecida `{segment}` ignorada.", style="yellow")
    if category and category.strip().lower() not in ("none", "all") and get_category(category) is None:
        console.print(f"Tipo desconhecido `{category}` ignorado.", style="yellow")

    progress_enabled = config.enable_progress_bar and not quiet and _progress_default_enabled()
    progress = ProgressReporter(enabled=progress_enabled, console=console)
    try:
        records, status, final = asyncio.run(_browse(config, segment, category, search, progress))
    except TransportError as exc:
        console.print(f"Erro ao carregar Pokémon: {exc}", style="red")
        raise typer.Exit(code=2)

    console.print(_render_records_table(records, config.max_rows_display))
    console.print(_format_status(status), style="bold")
    if final.dropped:
        console.print(
            f"{final.dropped_count} registros não carregados: "
            + ", ".join(ref.name for ref in final.dropped),
            style="yellow",
        )


@app.command("show", help="Mostra os detalhes de um Pokémon por nome ou número.")
def show(ctx: typer.Context, key: str = typer.Argument(..., help="Nome ou número.")) -> None:
    _show_detail(_get_state(ctx), key)


@app.command("random", help="Mostra um Pokémon aleatório.")
def random_record(ctx: typer.Context) -> None:
    _show_detail(_get_state(ctx), CatalogSession.random_id())


@app.command("segments", help="Lista as regiões e seus intervalos.")
def segments() -> None:
    table = Table(title="Regiões", box=box.SIMPLE_HEAD)
    table.add_column("Chave", style="cyan")
    table.add_column("Nome", style="bold")
    table.add_column("Intervalo", style="green")
    for segment in SEGMENTS:
        table.add_row(
            segment.key,
            segment.name,
            f"{labels.format_number(segment.start)}–{labels.format_number(segment.end)}",
        )
    console.print(table)


@config_app.command("show", help="Exibe a configuração efetiva.")
def config_show(ctx: typer.Context) -> None:
    state = _get_state(ctx)
    console.print(yaml.safe_dump(state.config.model_dump(mode="json"), allow_unicode=True, sort_keys=False))


@config_app.command("init", help="Grava a configuração padrão.")
def config_init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Sobrescreve o arquivo existente."),
) -> None:
    state = _get_state(ctx)
    path = state.repository.config_path()
    if path.exists() and not force:
        console.print(f"Arquivo já existe: {path}", style="yellow")
        raise typer.Exit(code=1)
    saved = state.repository.save_global_config(state.config)
    console.print(f"Configuração gravada em {saved}", style="green")


@log_app.command("list", help="Lista os arquivos de log.")
def log_list(ctx: typer.Context) -> None:
    state = _get_state(ctx)
    if state.config.log_dir is None:
        console.print("Logs em arquivo desativados.", style="yellow")
        return
    paths = list(available_logs(state.config.log_dir))
    if not paths:
        console.print("Nenhum log encontrado.", style="yellow")
        return
    for path in paths:
        console.print(path.name)


@log_app.command("show", help="Mostra as últimas linhas de um log.")
def log_show(
    ctx: typer.Context,
    name: str = typer.Argument("catalog", help="catalog ou error"),
    lines: int = typer.Option(50, "--lines", "-n", help="Quantidade de linhas."),
) -> None:
    state = _get_state(ctx)
    if state.config.log_dir is None:
        console.print("Logs em arquivo desativados.", style="yellow")
        raise typer.Exit(code=1)
    path = state.config.log_dir / f"{name}.log"
    content = tail_log(path, lines)
    if not content:
        console.print(f"Log vazio ou inexistente: {path.name}", style="yellow")
        return
    console.print("".join(content).rstrip("\n"), markup=False, highlight=False)


app.add_typer(config_app, name="config")
app.add_typer(log_app, name="log")


__all__ = ["app", "build_state"]
