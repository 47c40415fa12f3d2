"""CLI entry point for the CV job matcher."""

import argparse
import asyncio
import json
import logging
import sys

from jobmatch.core.config import Settings
from jobmatch.core.db import SavedJobStore, init_db, save_job
from jobmatch.core.errors import PipelineError
from jobmatch.platforms.jobtech.client import JobSearchClient
from jobmatch.platforms.jobtech.searcher import PublishDateFilter, WorkTimeFilter
from jobmatch.profile.extractor import read_pdf


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="CV job matcher - match a CV against job ads and tailor it to one",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML file (default: built-in defaults)",
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- serve ---
    serve_parser = subparsers.add_parser("serve", parents=[common], help="Run the HTTP API")
    serve_parser.add_argument("--host", default=None, help="Bind host (overrides config)")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port (overrides config)")

    # --- match ---
    match_parser = subparsers.add_parser(
        "match", parents=[common], help="Find jobs matching a CV PDF",
    )
    match_parser.add_argument("--cv", required=True, help="Path to CV PDF file")

    # --- tailor ---
    tailor_parser = subparsers.add_parser(
        "tailor", parents=[common], help="Get tailoring advice for a saved job",
    )
    tailor_parser.add_argument("--cv", required=True, help="Path to CV PDF file")
    tailor_parser.add_argument("--job-id", required=True, help="Saved job identifier")

    # --- search ---
    search_parser = subparsers.add_parser(
        "search", parents=[common], help='Search jobs, e.g. \'"data engineer" +python -php\'',
    )
    search_parser.add_argument("query", help="Free-text query with phrases and +/- markers")
    search_parser.add_argument("--offset", type=int, default=0, help="Result offset (default: 0)")
    search_parser.add_argument("--limit", type=int, default=10, help="Page size (default: 10)")
    search_parser.add_argument(
        "--published",
        default=PublishDateFilter.NONE.value,
        choices=[f.value for f in PublishDateFilter],
        help="Publish date filter (default: none)",
    )
    search_parser.add_argument(
        "--work-time",
        default=None,
        choices=[f.value for f in WorkTimeFilter],
        help="Working time filter",
    )
    search_parser.add_argument(
        "--mode", default="OR", choices=["AND", "OR"], help="Free-text bool method (default: OR)",
    )

    # --- save-job ---
    save_parser = subparsers.add_parser(
        "save-job", parents=[common], help="Fetch a job ad and add it to saved jobs",
    )
    save_parser.add_argument("--job-id", required=True, help="Job ad identifier")

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _search_client(settings: Settings) -> JobSearchClient:
    return JobSearchClient(settings.search, settings.search_api_key)


def cmd_serve(args: argparse.Namespace, settings: Settings) -> None:
    """Handle serve subcommand."""
    import uvicorn

    from jobmatch.api.app import create_app
    from jobmatch.profile.llm import get_provider

    provider = get_provider(settings.llm.provider, settings.llm)
    conn = init_db(settings.database.path)
    app = create_app(
        settings,
        provider=provider,
        search_client=_search_client(settings),
        job_lookup=SavedJobStore(conn),
    )
    try:
        uvicorn.run(
            app,
            host=args.host or settings.server.host,
            port=args.port or settings.server.port,
        )
    finally:
        conn.close()


async def cmd_match(args: argparse.Namespace, settings: Settings) -> None:
    """Handle match subcommand."""
    from jobmatch.pipeline.orchestrator import PDF_CONTENT_TYPE, run_match_flow
    from jobmatch.profile.llm import get_provider

    result = await run_match_flow(
        read_pdf(args.cv),
        PDF_CONTENT_TYPE,
        provider=get_provider(settings.llm.provider, settings.llm),
        search_client=_search_client(settings),
        settings=settings,
    )

    print(f"Skills: {', '.join(result.skills)}")
    print(f"\n{result.total_jobs} matching jobs, showing {len(result.jobs)}:")
    for job in result.jobs:
        location = f" ({job.city})" if job.city else ""
        print(f"  [{job.id}] {job.headline or '(untitled)'} - {job.employer_name}{location}")


async def cmd_tailor(args: argparse.Namespace, settings: Settings) -> None:
    """Handle tailor subcommand."""
    from jobmatch.pipeline.orchestrator import run_tailor_flow
    from jobmatch.profile.llm import get_provider

    document = read_pdf(args.cv)
    conn = init_db(settings.database.path)
    try:
        result = await run_tailor_flow(
            document,
            args.job_id,
            provider=get_provider(settings.llm.provider, settings.llm),
            search_client=_search_client(settings),
            job_lookup=SavedJobStore(conn),
            settings=settings,
        )
    finally:
        conn.close()

    print(f"Tailoring advice for: {result.job_title}\n")
    print(result.result)


async def cmd_search(args: argparse.Namespace, settings: Settings) -> None:
    """Handle search subcommand."""
    from jobmatch.query.grammar import parse, serialize

    query = serialize(parse(args.query))
    response = await _search_client(settings).search(
        query,
        offset=args.offset,
        limit=args.limit,
        publish_date=PublishDateFilter(args.published),
        work_time=WorkTimeFilter(args.work_time) if args.work_time else None,
        mode=args.mode,
    )
    print(json.dumps(
        {
            "query": query,
            "total": response.total,
            "hits": [
                {"id": h.id, "headline": h.headline, "employer": h.employer_name}
                for h in response.hits
            ],
        },
        indent=2,
        ensure_ascii=False,
    ))


async def cmd_save_job(args: argparse.Namespace, settings: Settings) -> None:
    """Handle save-job subcommand."""
    listing = await _search_client(settings).fetch_ad(args.job_id)
    if listing is None:
        msg = f"Job {args.job_id} not found in index"
        raise ValueError(msg)

    conn = init_db(settings.database.path)
    try:
        created = save_job(conn, listing)
    finally:
        conn.close()
    status = "Saved" if created else "Already saved"
    print(f"{status}: [{listing.id}] {listing.headline or '(untitled)'}")


_ASYNC_COMMANDS = {
    "match": cmd_match,
    "tailor": cmd_tailor,
    "search": cmd_search,
    "save-job": cmd_save_job,
}


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = Settings.load(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.command == "serve":
            cmd_serve(args, settings)
        else:
            asyncio.run(_ASYNC_COMMANDS[args.command](args, settings))
    except (PipelineError, FileNotFoundError, ImportError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
