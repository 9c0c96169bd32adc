"""
storyprompt – structured story-prompt builder
 • wizard (interactive or --config answers file)
 • generate: free text → LLM extraction → JSON
 • curl / export / toon / copy / validate on a saved prompt.json
"""

from __future__ import annotations
import asyncio, json
from pathlib import Path
from typing import Dict, List

import typer
from rich import print
from jsonschema import ValidationError as SchemaError
from openai import OpenAIError
from pydantic import ValidationError

from storyprompt_cli import config, logconf
from storyprompt_cli.export.clipboard import copy_to_clipboard
from storyprompt_cli.export.curl import generate_curl
from storyprompt_cli.export.download import LocalFileSaver, download_json
from storyprompt_cli.export.providers import (
    generate_claude_code,
    generate_claude_payload,
    generate_openai_code,
    generate_openai_payload,
)
from storyprompt_cli.export.serialize import pretty_json
from storyprompt_cli.export.toon import generate_toon
from storyprompt_cli.llm.openai_wrapper import generate_structure
from storyprompt_cli.models import IntermediateFormat, JSONOutput
from storyprompt_cli.store import PromptStore
from storyprompt_cli.utils.normalize import (
    infer_moderation_from_rules,
    merge_intermediate,
    normalize_to_output,
)
from storyprompt_cli.utils.parser import (
    detect_genre,
    extract_limits,
    extract_rules,
    parse_llm_response,
)
from storyprompt_cli.utils.validate import check_limits, validate_output

TARGETS = ("openai", "claude")


# ═════════ helpers ═════════
def _collect_list(title: str, pre: List[str] | None) -> List[str]:
    if pre is not None:
        return pre
    print(f"\n[i]{title}[/] (blank → finish)")
    lst: List[str] = []
    while True:
        line = input("> ").strip()
        if not line:
            break
        lst.append(line)
    return lst


def _load_output(path: Path) -> JSONOutput:
    try:
        data = validate_output(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        print(f"[yellow]⚠ File missing:[/]\n{e.filename}")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        print(f"[red]❌ Not JSON:[/] {e}")
        raise typer.Exit(1)
    except SchemaError as e:
        print(f"[red]❌ Validation failed:[/]\n{e.message}\n\nPath: {list(e.path)}")
        raise typer.Exit(1)
    return JSONOutput.model_validate(data)


def _whole(value):
    """typer float prompts turn 100 into 100.0; keep whole numbers as int."""
    return int(value) if isinstance(value, float) and value.is_integer() else value


def _warn_limits(output: JSONOutput) -> None:
    for w in check_limits(output.limits):
        print(f"[yellow]⚠ {w}[/]")


def _finish(output: JSONOutput, out: str, copy: bool, curl: bool, endpoint: str | None) -> None:
    typer.echo(pretty_json(output))
    _warn_limits(output)

    if download_json(output, out, LocalFileSaver(config.ARTIFACTS_DIR)):
        print(f"[green]✔ Prompt saved to {config.ARTIFACTS_DIR / out}[/]")
    else:
        print(f"[red]❌ Could not save {out}[/]")

    if curl:
        typer.echo(generate_curl(output, endpoint))
    if copy:
        _copy(pretty_json(output))


def _copy(text: str) -> None:
    if asyncio.run(copy_to_clipboard(text)):
        print("[green]✔ Copied to clipboard[/]")
    else:
        print("[yellow]⚠ Clipboard not available[/]")


def _heuristic_intermediate(text: str) -> IntermediateFormat:
    """Offline fallback when the model returned nothing (e.g. --dry-run)."""
    mod = infer_moderation_from_rules([text])
    return merge_intermediate(
        IntermediateFormat(),
        {
            "main_task": text.strip(),
            "rules": extract_rules(text),
            "genre": detect_genre(text),
            "moderation": {"allow_vulgar": mod["allowVulgar"], "allow_cussing": mod["allowCussing"]},
            "limits": extract_limits(text),
        },
    )


# ═════════════════════ CLI ═════════════════════
app = typer.Typer(pretty_exceptions_show_locals=False)


@app.callback(invoke_without_command=True)
def wizard(
    ctx: typer.Context,
    config_path: Path | None = typer.Option(None, "--config", help="JSON answers file"),
    out: str = typer.Option("prompt.json", "--out"),
    copy: bool = typer.Option(False, "--copy/--no-copy"),
    curl: bool = typer.Option(False, "--curl/--no-curl"),
    endpoint: str = typer.Option(config.ENDPOINT_DEFAULT, "--endpoint"),
    log_level: str = typer.Option(config.LOG_LEVEL, "--log-level"),
):
    logconf.init(log_level)
    if ctx.invoked_subcommand:
        return

    cfg: Dict = json.loads(config_path.read_text()) if config_path else {}
    if cfg:
        print(f"[yellow]Loaded answers from {config_path}[/]")

    def ans(key: str, prompt: str, default=None, type=None):
        return cfg[key] if key in cfg else typer.prompt(prompt, default=default, type=type)

    def yes(key: str, prompt: str) -> bool:
        return bool(cfg[key]) if key in cfg else typer.confirm(prompt, False)

    print("[bold cyan]─── Story Prompt Builder ───[/]\n")
    store = PromptStore()

    # ① task & rules
    store.set_main_task(ans("main_task", "Main task"))
    for rule in _collect_list("Rules", cfg.get("rules")):
        store.add_rule(rule)

    # ② story
    store.set_genre(ans("genre", "Genre", config.DEFAULT_GENRE))
    store.set_plot(ans("plot", "Plot (blank ok)", ""))
    store.set_specifics(_collect_list("Specifics", cfg.get("specifics")))

    # ③ moderation
    store.set_vulgar(yes("vulgar", "Allow vulgar content?"))
    store.set_cussing(yes("cussing", "Allow cussing?"))

    # ④ limits
    try:
        store.set_min_words(int(ans("min_words", "Min words", config.DEFAULT_MIN_WORDS, int)))
        store.set_max_words(int(ans("max_words", "Max words", config.DEFAULT_MAX_WORDS, int)))
        store.set_max_chapters(int(ans("chapters", "Chapters", config.DEFAULT_CHAPTERS, int)))
        store.set_uniqueness(_whole(ans("uniqueness", "Uniqueness (0-100)", config.DEFAULT_UNIQUENESS, float)))
    except ValidationError as e:
        print(f"[red]❌ Invalid limit:[/] {e.errors()[0]['msg']}")
        raise typer.Exit(1)

    _finish(store.build(), out, copy, curl, endpoint)


@app.command()
def generate(
    text: str = typer.Argument(..., help="Natural language description of the story"),
    model: str = typer.Option(config.MODEL_DEFAULT, "--model"),
    temperature: float = typer.Option(0.3, "--temperature"),
    dry_run: bool = typer.Option(False, "--dry-run/--live"),
    out: str = typer.Option("prompt.json", "--out"),
    copy: bool = typer.Option(False, "--copy/--no-copy"),
    curl: bool = typer.Option(False, "--curl/--no-curl"),
    toon: bool = typer.Option(False, "--toon/--no-toon", help="Also print the TOON rendering"),
    endpoint: str = typer.Option(config.ENDPOINT_DEFAULT, "--endpoint"),
):
    """Extract a structured prompt from free text with an LLM."""
    store = PromptStore()
    store.set_is_generating(True)
    try:
        raw = generate_structure(text, model=model, temperature=temperature, dry_run=dry_run)
    except OpenAIError as e:
        store.set_generation_error(str(e))
        print(f"[red]❌ Generation failed:[/] {e}")
        raise typer.Exit(1)
    finally:
        store.set_is_generating(False)

    intermediate = parse_llm_response(raw) if raw.strip() else _heuristic_intermediate(text)
    output = normalize_to_output(intermediate)
    store.load_from_output(output)
    store.set_generated_toon(generate_toon(output))
    _finish(store.build(), out, copy, curl, endpoint)
    if toon:
        typer.echo(store.generated_toon)


@app.command("curl")
def curl_cmd(
    path: Path = typer.Argument(...),
    endpoint: str = typer.Option(config.ENDPOINT_DEFAULT, "--endpoint"),
):
    """Print a cURL template for a saved prompt."""
    typer.echo(generate_curl(_load_output(path), endpoint))


@app.command()
def export(
    path: Path = typer.Argument(...),
    target: str = typer.Option("openai", "--target", help="openai | claude"),
    code: bool = typer.Option(False, "--code/--curl", help="Python SDK snippet instead of cURL"),
):
    """Render a provider request (cURL or SDK snippet) for a saved prompt."""
    if target not in TARGETS:
        print(f"[red]❌ Unknown target {target!r} (choose from {', '.join(TARGETS)})[/]")
        raise typer.Exit(1)
    output = _load_output(path)
    if target == "openai":
        typer.echo(generate_openai_code(output) if code else generate_openai_payload(output)[1])
    else:
        typer.echo(generate_claude_code(output) if code else generate_claude_payload(output)[1])


@app.command("toon")
def toon_cmd(path: Path = typer.Argument(...)):
    """Print the TOON rendering of a saved prompt."""
    typer.echo(generate_toon(_load_output(path)))


@app.command("copy")
def copy_cmd(path: Path = typer.Argument(...)):
    """Copy a saved prompt's JSON to the system clipboard."""
    _copy(pretty_json(_load_output(path)))


@app.command()
def validate(path: Path = typer.Argument(...)):
    """Schema-check a saved prompt and report limit inconsistencies."""
    output = _load_output(path)
    _warn_limits(output)
    print(f"[green]✔ {path.name} is valid.[/]")


if __name__ == "__main__":
    app()
