from __future__ import annotations

import argparse
import json
import os
import shutil
import signal
import sys
import threading
from typing import Any, List, Optional

from rich import box
from rich.console import Console
from rich.markdown import Markdown
from rich.padding import Padding
from rich.panel import Panel
from rich.table import Table

from src.container import container
from src.exceptions import BaseAppError
from src.utils.log import configure_logging
from src.utils.token_counter import estimate_total_tokens

CODER_PROFILE_SYSTEM = (
    "You are a coding assistant working in the user's current project directory.\n"
    "1) Inspect before editing: use directory_structure, search_codebase and code_context.\n"
    "2) Edit existing files with patch_file. Line numbers refer to the file before the patch; "
    "re-read a file with code_context before patching it again.\n"
    "3) Create new files and folders with create_item or the batch create_* tools, "
    "then fill them with patch_file.\n"
    "4) If a patch went wrong, use rollback_patch with the backup path it returned.\n"
    "Do not print whole files as plain text; write them to disk instead."
)

COMMANDS: list[tuple[str, str]] = [
    ("/help", "Show this help"),
    ("/status", "Show model, settings and token usage"),
    ("/system <text>", "Set/override system message (empty clears it)"),
    ("/temp <float>", "Set temperature"),
    ("/steps <int>", "Set max tool steps per turn"),
    ("/cwd [path]", "Show or change working directory"),
    ("/clear", "Clear conversation"),
    ("/save <file.json>", "Save conversation and last steps"),
    ("/load <file.json>", "Load saved conversation"),
    ("/exit", "Exit"),
]


def _parse_slash(line: str) -> tuple[str, list[str]]:
    parts = line.strip().split()
    cmd = parts[0][1:].lower()
    args = parts[1:]
    return cmd, args


def _term_width(default: int = 120) -> int:
    try:
        w = shutil.get_terminal_size((default, 20)).columns
        return max(40, min(w, 240))
    except OSError:
        return default


def _shorten(obj: Any, width: Optional[int] = None) -> str:
    if width is None:
        width = _term_width()
    s = str(obj).replace("\n", " ")
    return s if len(s) <= width else (s[: width - 1] + "…")


def _render_reply(console: Console, text: str, *, plain: bool = False) -> None:
    """Render assistant text as Markdown in a panel, or as-is with --plain."""
    if plain:
        console.print(text)
        return
    console.print(
        Panel(
            Padding(Markdown(text), (0, 1)),
            title="assistant",
            box=box.ROUNDED,
            border_style="magenta",
            expand=True,
        )
    )


def build_parser() -> argparse.ArgumentParser:
    settings = container.settings
    parser = argparse.ArgumentParser(
        prog="spectre",
        description="Interactive coding assistant with file patch and create tools.",
    )
    parser.add_argument("--system", default=None, help="Override system message")
    parser.add_argument(
        "--temp", type=float, default=settings.temperature, help="Temperature"
    )
    parser.add_argument(
        "--max-tokens", type=int, default=settings.max_tokens, help="Max tokens"
    )
    parser.add_argument("--steps", type=int, default=10, help="Max tool steps per turn")
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Render assistant messages as plain text (no Markdown/Panel)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.debug,
        help="Log every tool execution at debug level",
    )
    return parser


def interactive_main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)

    system_message: Optional[str] = args.system or CODER_PROFILE_SYSTEM
    messages: List[dict[str, Any]] = []

    try:
        llm_tools = container.get_llm_tools_adapter()
    except BaseAppError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    console = Console(highlight=True, soft_wrap=True)
    console.print(
        Panel(
            "Spectre: interactive coding assistant\n"
            "Type /help for commands. Ctrl+C cancels the current turn.",
            title="Spectre",
            border_style="cyan",
            box=box.ROUNDED,
        )
    )

    cancel_event = threading.Event()

    def _sigint_handler(signum, frame):  # type: ignore[no-untyped-def]
        cancel_event.set()

    # Ctrl+C during a turn cancels the next model request
    try:
        signal.signal(signal.SIGINT, _sigint_handler)
    except ValueError:
        pass

    last_steps: list[dict[str, Any]] = []
    last_text: str = ""

    while True:
        try:
            console.print("[cyan]you> [/cyan]", end="")
            prompt = input().strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not prompt:
            continue

        if prompt.startswith("/"):
            cmd, sargs = _parse_slash(prompt)
            if cmd in ("h", "help"):
                tbl = Table(title="Commands", box=box.MINIMAL_DOUBLE_HEAD)
                tbl.add_column("Command", style="cyan", no_wrap=True)
                tbl.add_column("Description")
                for name, description in COMMANDS:
                    tbl.add_row(name, description)
                console.print(tbl)
                continue
            if cmd == "system":
                system_message = " ".join(sargs) if sargs else None
                msg = (
                    "[green]System set.[/green]"
                    if system_message
                    else "[yellow]System cleared.[/yellow]"
                )
                console.print(msg)
                continue
            if cmd == "temp" and sargs:
                try:
                    args.temp = float(sargs[0])
                    console.print(f"[blue]Temperature[/blue] = {args.temp}")
                except ValueError:
                    console.print("[red]Invalid temp[/red]")
                continue
            if cmd == "steps" and sargs:
                try:
                    args.steps = int(sargs[0])
                    console.print(f"[blue]Tool steps[/blue] = {args.steps}")
                except ValueError:
                    console.print("[red]Invalid steps[/red]")
                continue
            if cmd == "status":
                info = llm_tools.get_model_info()
                stbl = Table(title="Status", box=box.SIMPLE_HEAVY)
                stbl.add_column("Key", style="magenta")
                stbl.add_column("Value")
                stbl.add_row("model", str(info.get("model")))
                stbl.add_row("cwd", os.getcwd())
                stbl.add_row("temperature", str(args.temp))
                stbl.add_row("max_tokens", str(args.max_tokens))
                stbl.add_row("steps", str(args.steps))
                stbl.add_row("messages", str(len(messages)))
                stbl.add_row("tokens (est.)", str(estimate_total_tokens(messages)))
                stbl.add_row("backup_dir", container.settings.backup_dir)
                console.print(stbl)
                continue
            if cmd == "load" and sargs:
                path = sargs[0]
                try:
                    with open(path, "r", encoding="utf-8") as f:
                        data = json.load(f)
                    messages = list(data.get("conversation", []))
                    last_text = str(data.get("last_text", ""))
                    last_steps = list(data.get("last_steps", []))
                    console.print(f"[green]Loaded[/green] {path}")
                except (OSError, ValueError) as e:
                    console.print(f"[red]Load failed:[/red] {e}")
                continue
            if cmd == "cwd":
                if not sargs:
                    console.print(f"[dim]{os.getcwd()}[/dim]")
                else:
                    try:
                        os.chdir(sargs[0])
                        console.print(f"[dim]{os.getcwd()}[/dim]")
                    except OSError as e:
                        console.print(f"[red]Failed to chdir:[/red] {e}")
                continue
            if cmd == "clear":
                messages.clear()
                last_steps = []
                last_text = ""
                console.print("[yellow]Conversation cleared.[/yellow]")
                continue
            if cmd == "save" and sargs:
                path = sargs[0]
                try:
                    with open(path, "w", encoding="utf-8") as f:
                        json.dump(
                            {
                                "conversation": messages,
                                "last_text": last_text,
                                "last_steps": last_steps,
                            },
                            f,
                            ensure_ascii=False,
                            indent=2,
                        )
                    console.print(f"💾 [green]Saved to[/green] {path}")
                except OSError as e:
                    console.print(f"[red]Save failed:[/red] {e}")
                continue
            if cmd in ("exit", "quit", "q"):
                break
            console.print("[red]Unknown command.[/red] Use /help for list.")
            continue

        cancel_event.clear()

        def _on_step(ev: dict[str, Any]) -> None:
            phase = str(ev.get("phase") or "")
            name = str(ev.get("name") or "?")
            if phase == "call":
                console.print(
                    f"[dim]tool>[/dim] [cyan]▶ {name}[/cyan] [dim]{_shorten(ev.get('arguments'))}[/dim]"
                )
            elif phase == "result":
                console.print(
                    f"[dim]tool>[/dim] [green]✔ {name}:[/green] {_shorten(ev.get('result'))}"
                )

        try:
            result = llm_tools.run_chat_turn(
                messages,
                user_text=prompt,
                system_message=system_message,
                temperature=args.temp,
                max_tokens=args.max_tokens,
                tool_max_steps=args.steps,
                on_step=_on_step,
                should_cancel=cancel_event.is_set,
            )
        except KeyboardInterrupt:
            cancel_event.set()
            console.print("[yellow]Cancelled.[/yellow]")
            continue
        except BaseAppError as e:
            console.print(f"[red]Error:[/red] {e}")
            continue

        messages = list(result.get("messages", []) or [])
        last_steps = list(result.get("steps", []) or [])
        last_text = str(result.get("text", ""))

        if result.get("cancelled"):
            console.print("[yellow]Cancelled.[/yellow]")
            continue
        if last_text:
            _render_reply(console, last_text, plain=bool(args.plain))

    return 0


def main(argv: Optional[list[str]] = None) -> int:  # pragma: no cover
    return interactive_main(argv)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
