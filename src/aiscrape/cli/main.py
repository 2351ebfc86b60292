from __future__ import annotations

import argparse
import logging
import signal
import threading

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from aiscrape.core.config import load_settings, Settings
from aiscrape.core.errors import AiscrapeError
from aiscrape.core.extractor import extract_from_document
from aiscrape.utils.formatting import wrap_text
from aiscrape.utils.web import page_text

console = Console()

EXIT_WORD = "exit"


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="aiscrape", description="Scrape a web page and extract information from it with Gemini")
    ap.add_argument("--model", default=None, help="Gemini model name (default: gemini-1.5-flash)")
    ap.add_argument("--base-url", default=None, help="Gemini API base URL")
    ap.add_argument("--chunk-length", type=int, default=None, help="Characters per chunk sent to the model (default: 6000)")
    ap.add_argument("--max-chunks", type=int, default=None, help="Maximum number of chunks processed per page (default: 16)")
    ap.add_argument("--line-width", type=int, default=None, help="Width of the printed result (default: 80)")
    ap.add_argument("--timeout", type=float, default=None, help="Per-request timeout in seconds (default: 300)")
    ap.add_argument("--env-file", default=None, help="Path to a .env file (default: ./.env)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return ap


def render_progress(idx: int, total: int) -> None:
    console.print(f"Processing chunk {idx} of {total}...")


def run_once(url: str, instruction_prompt, settings: Settings, cancel_event: threading.Event | None = None) -> None:
    """One scrape cycle: fetch, ask for the instruction, extract, print."""
    console.print("Scraping website, please wait...")
    document = page_text(url, timeout=settings.request_timeout)

    instruction = instruction_prompt().strip()

    console.print("Processing your request, please wait...")
    result = extract_from_document(
        document,
        instruction,
        settings=settings,
        on_progress=render_progress,
        cancel_event=cancel_event,
    )

    console.print("[bold]Parsed Result:[/bold]")
    # Model text goes out verbatim, not through rich rendering.
    out = console.file
    out.write(wrap_text(result.text, settings.line_width))
    out.flush()
    if result.dropped_chunks:
        console.print(
            f"[dim]Only the first {result.processed_chunks} of {result.total_chunks} chunks were processed.[/dim]"
        )


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(
            args.env_file,
            model=args.model,
            base_url=args.base_url,
            chunk_length=args.chunk_length,
            max_chunks=args.max_chunks,
            line_width=args.line_width,
            request_timeout=args.timeout,
        )
    except AiscrapeError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(2)

    cancel_event = threading.Event()

    def shutdown(signum, frame):
        # A chunk loop that outlives the interrupt sees the event before its next call.
        cancel_event.set()
        raise KeyboardInterrupt

    previous = {sig: signal.signal(sig, shutdown) for sig in (signal.SIGINT, signal.SIGTERM)}

    def ask_instruction() -> str:
        return console.input("Describe what you want to parse from the website: ")

    try:
        while True:
            url = console.input(f"Enter the website URL you want to scrape (or type '{EXIT_WORD}' to quit): ").strip()
            if url.lower() == EXIT_WORD:
                console.print("Exiting application.")
                return
            if not url:
                continue

            try:
                run_once(url, ask_instruction, settings, cancel_event)
            except AiscrapeError as e:
                console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
    except (KeyboardInterrupt, EOFError):
        console.print("\nReceived shutdown signal, exiting...")
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


if __name__ == "__main__":
    main()
