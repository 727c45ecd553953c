"""
Command-line interface for Movie Finder.

Provides commands for:
- setup: Create the search-count tables
- test: Test the TMDB API connection
- search: Search movies (or list popular ones) and page through results
- trending: Show the most searched terms
- browse: Interactive search screen
"""

import argparse
import sys
from typing import Optional

from .client import TMDBClient
from .config import Config
from .controller import SearchController
from .exceptions import StoreError
from .state import SearchState
from .store import SearchStore
from .utils import print_header, print_section, print_status_table, truncate_string

BROWSE_HELP = """
Type a movie title and press Enter to search (empty line lists popular movies).
  :more       Load the next page
  :trending   Reload the trending list
  :quit       Exit
"""


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with all commands."""
    parser = argparse.ArgumentParser(
        prog="movie_finder",
        description="Movie Finder - Search TMDB and see what others are searching for",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Setup (run first)
  python -m movie_finder setup

  # Search for a movie, first two pages
  python -m movie_finder search "Batman" --pages 2

  # Popular movies
  python -m movie_finder search

  # Trending searches
  python -m movie_finder trending --limit 10

  # Interactive search screen
  python -m movie_finder browse
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "setup",
        help="Create the search-count tables",
    )

    subparsers.add_parser(
        "test",
        help="Test TMDB API connection",
    )

    search_parser = subparsers.add_parser(
        "search",
        help="Search movies by title (popular movies when no query is given)",
    )
    search_parser.add_argument(
        "query",
        nargs="?",
        default="",
        help="Movie title to search for",
    )
    search_parser.add_argument(
        "--pages",
        type=int,
        default=1,
        help="Number of pages to load (default: 1)",
    )

    trending_parser = subparsers.add_parser(
        "trending",
        help="Show the most searched terms",
    )
    trending_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Number of entries (default: TRENDING_LIMIT)",
    )

    subparsers.add_parser(
        "browse",
        help="Interactive search screen",
    )

    return parser


def render_trending(state: SearchState) -> None:
    """Print the trending section; hidden when the list is empty."""
    if not state.trending:
        return
    print_section("Trending searches")
    for rank, entry in enumerate(state.trending, 1):
        title = entry.title or entry.search_term
        print(f"  {rank}. {truncate_string(title, 40):<40} ({entry.count} searches)")


def render_movies(state: SearchState) -> None:
    """Print the movie list, the error message, or a loading note."""
    heading = f"Results for '{state.debounced_term}'" if state.debounced_term else "Popular movies"
    print_section(heading)

    if state.is_loading_initial:
        print("  Loading...")
        return
    if state.error_message:
        print(f"  {state.error_message}")
        return
    if not state.movies:
        print("  No movies found.")
        return

    for index, movie in enumerate(state.movies, 1):
        print(movie.display_line(index))

    if state.has_more:
        print(f"\n  Page {state.current_page} - more available")
    else:
        print(f"\n  Page {state.current_page} - end of results")


def cmd_setup(store: SearchStore) -> int:
    """Run setup command."""
    print_header("Movie Finder Setup")

    result = store.create_tables()
    for table in SearchStore.TABLES:
        if table in result["existing"]:
            print(f"  {table:<20} EXISTS")
        else:
            print(f"  {table:<20} CREATED")

    print("\nSetup complete!")
    return 0


def cmd_test(client: TMDBClient) -> int:
    """Run connection test command."""
    print_header("TMDB Connection Test")

    if client.test_connection():
        print("Connection OK")
        return 0
    print("Connection FAILED - check TMDB_BEARER_TOKEN")
    return 1


def cmd_search(controller: SearchController, args) -> int:
    """Run search command."""
    print_header("Search Movies")

    controller.search(args.query)
    for _ in range(max(args.pages, 1) - 1):
        if not controller.load_more():
            break

    render_movies(controller.state)
    return 1 if controller.state.error_message else 0


def cmd_trending(store: SearchStore, config: Config, args) -> int:
    """Run trending command."""
    print_header("Trending Searches")

    limit = args.limit or config.trending_limit
    trending = store.get_trending(limit=limit)

    if not trending:
        print("No searches recorded yet.")
        return 0

    print_status_table(
        {
            f"{rank}. {entry.search_term}": f"{entry.count} searches - {entry.title or 'N/A'}"
            for rank, entry in enumerate(trending, 1)
        },
        title=f"Top {len(trending)}",
    )
    return 0


def cmd_browse(controller: SearchController) -> int:
    """Run the interactive search screen."""
    print_header("Find Movies You'll Enjoy")
    print(BROWSE_HELP)

    controller.start()
    render_trending(controller.state)
    render_movies(controller.state)

    try:
        while True:
            line = input("\nsearch> ").strip()

            if line == ":quit":
                break
            if line == ":more":
                if controller.load_more():
                    render_movies(controller.state)
                elif controller.state.error_message:
                    render_movies(controller.state)
                else:
                    print("  No more pages.")
                continue
            if line == ":trending":
                controller.load_trending()
                render_trending(controller.state)
                continue

            # Each line is complete input; apply it without waiting for the timer
            controller.set_search_term(line)
            controller.flush_search_term()
            render_movies(controller.state)
    except EOFError:
        pass
    finally:
        controller.close()

    return 0


def main(args: Optional[list] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 0

    # Load configuration
    try:
        config = Config.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}")
        print("\nMake sure your .env file contains:")
        print("  TMDB_BEARER_TOKEN=<your_tmdb_read_access_token>")
        print("  SEARCH_DB_URL=<sqlalchemy url> (optional, defaults to sqlite)")
        return 1

    # Create components
    try:
        client = TMDBClient(config)
        store = SearchStore(config)
        controller = SearchController(client, store, config)
    except Exception as e:
        print(f"Error initializing Movie Finder: {e}")
        return 1

    # Route to command handler
    try:
        if parsed_args.command == "setup":
            return cmd_setup(store)
        elif parsed_args.command == "test":
            return cmd_test(client)
        elif parsed_args.command == "search":
            return cmd_search(controller, parsed_args)
        elif parsed_args.command == "trending":
            return cmd_trending(store, config, parsed_args)
        elif parsed_args.command == "browse":
            return cmd_browse(controller)
        else:
            parser.print_help()
            return 0

    except KeyboardInterrupt:
        print("\n\nOperation cancelled.")
        return 130
    except StoreError as e:
        print(f"\nStore error: {e}")
        print("Run 'python -m movie_finder setup' to create missing tables.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
