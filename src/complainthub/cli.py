"""Command-line interface for ComplaintHub."""

import argparse
import json
import logging
import sys

from .core.config import settings
from .core.constants import FileConstants
from .core.detector import ComplaintDetector
from .core.lexicon import load_lexicon
from .core.pipeline import run_pipeline
from .services.reddit_client import RedditService
from .utils.data_prep import export_to_json, filter_negative_clusters, prepare_export

logger = logging.getLogger(__name__)


def setup_logging():
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=FileConstants.LOG_FORMAT
    )


def _print_progress(current: int, total: int, stage: str) -> None:
    end = "\n" if total and current >= total else ""
    print(f"\r{stage} ({current}/{total if total > 0 else '?'})", end=end, file=sys.stderr, flush=True)


def cmd_fetch(args):
    """Fetch command."""
    reddit_service = RedditService()
    posts = reddit_service.fetch_posts(args.subreddit, args.months, args.limit)

    total_comments = sum(p.num_comments for p in posts)
    print(f"Fetched {len(posts)} posts ({total_comments} comments) from r/{args.subreddit}")

    if posts:
        sample = posts[0]
        print("\nSample post:")
        print(f"Author: {sample.author}")
        print(f"Title: {sample.title[:100]}")
        print(f"Comments: {sample.num_comments}")


def cmd_analyze(args):
    """Analyze command."""
    detector = ComplaintDetector(load_lexicon(settings.lexicon_path or None))
    reddit_service = RedditService()

    print(f"Analyzing r/{args.subreddit} over the last {args.months} months...")
    posts = reddit_service.fetch_posts(args.subreddit, args.months, args.limit, on_progress=_print_progress)
    print(f"Fetched {len(posts)} posts")

    result = run_pipeline(posts, detector=detector, on_progress=_print_progress, threshold=args.threshold)

    for error in result.errors:
        print(f"Error: {error}")
    if result.failed:
        return 1

    clusters = filter_negative_clusters(result.clusters) if args.negative_only else result.clusters
    if not clusters:
        print("No complaints found!")
        return 0

    print(f"\nFound {len(result.complaints)} complaints in {len(result.clusters)} clusters")
    if args.negative_only:
        print(f"Showing {len(clusters)} clusters with strongly negative terms")

    for i, cluster in enumerate(clusters[:args.top], 1):
        category = cluster.category or "Uncategorized"
        print(f"  {i}. [{category}] {cluster.summary}")
        print(f"     {cluster.frequency} complaints | score {cluster.total_score} | "
              f"sentiment {cluster.avg_sentiment:+.2f} | negative terms {cluster.negative_terms_count}")

    if args.out:
        export_to_json(prepare_export(args.subreddit, args.months, result, clusters), args.out)
        print(f"Results exported to {args.out}")
    return 0


def cmd_export(args):
    """Export command."""
    try:
        with open(args.input_file, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if args.pretty:
            print(json.dumps(data, indent=2, ensure_ascii=False))
        else:
            output_file = args.output or args.input_file.replace('.json', '_export.json')
            with open(output_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            print(f"Exported to {output_file}")

    except FileNotFoundError:
        print(f"Input file {args.input_file} not found")
        return 1
    except json.JSONDecodeError as e:
        print(f"Invalid JSON in input file: {e}")
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ComplaintHub - Subreddit Complaint Clustering")
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Fetch command
    fetch_parser = subparsers.add_parser('fetch', help='Fetch posts and comments')
    fetch_parser.add_argument('subreddit', help='Subreddit name (with or without r/)')
    fetch_parser.add_argument('--months', type=int, default=settings.default_months, help='Time range in months')
    fetch_parser.add_argument('--limit', type=int, default=settings.default_post_limit, help='Number of posts')

    # Analyze command
    analyze_parser = subparsers.add_parser('analyze', help='Detect and cluster complaints')
    analyze_parser.add_argument('subreddit', help='Subreddit name (with or without r/)')
    analyze_parser.add_argument('--months', type=int, default=settings.default_months, help='Time range in months')
    analyze_parser.add_argument('--limit', type=int, default=settings.default_post_limit, help='Number of posts')
    analyze_parser.add_argument('--threshold', type=float, default=None,
                                help='Similarity threshold (default from settings)')
    analyze_parser.add_argument('--negative-only', action='store_true',
                                help='Only show clusters containing strongly negative terms')
    analyze_parser.add_argument('--top', type=int, default=10, help='Number of clusters to print')
    analyze_parser.add_argument('--out', help='Output JSON file')

    # Export command
    export_parser = subparsers.add_parser('export', help='Export analysis results')
    export_parser.add_argument('--in', dest='input_file', required=True, help='Input JSON file')
    export_parser.add_argument('--out', dest='output', help='Output file (optional)')
    export_parser.add_argument('--pretty', action='store_true', help='Pretty print to stdout')

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    setup_logging()

    try:
        if args.command == 'fetch':
            code = cmd_fetch(args)
        elif args.command == 'analyze':
            code = cmd_analyze(args)
        else:
            code = cmd_export(args)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(2)
    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
