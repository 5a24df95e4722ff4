#!/usr/bin/env python3
"""
Recommendation System Try-Out Script

Calls any recommendation mode against the live Gemini API from the command
line, without running the HTTP server.

Usage:
    python scripts/try_recommendations.py search --query "a movie about a friendly robot" --content-type MOVIES
    python scripts/try_recommendations.py surprise --content-type BOTH
    python scripts/try_recommendations.py group --time Evening
    python scripts/try_recommendations.py analysis --mood Happy --time Evening
    python scripts/try_recommendations.py --suite
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import List

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

load_dotenv()

from firesync.agents.recommendation.errors import RecommendationError
from firesync.schemas.analysis import WatchPatternAnalysis
from firesync.schemas.recommendations import RecommendationItem
from firesync.services.recommendation_service import (
    analyze_watch_patterns,
    generate_content_recommendations,
    generate_group_compromise_recommendations,
    generate_surprise_recommendations,
    generate_text_query_recommendations,
)
from firesync.utils.constants import CONTENT_TYPES, MOODS, TIMES_OF_DAY

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


SAMPLE_HISTORY = [
    {"title": "Inception", "rating": 5, "completed": True, "moodAtWatch": "Excited", "timeOfDayAtWatch": "Night"},
    {"title": "The Office", "rating": 4, "completed": True, "moodAtWatch": "Goofy", "timeOfDayAtWatch": "Evening"},
    {"title": "Mad Max: Fury Road", "rating": 5, "completed": True, "moodAtWatch": "Adventurous"},
    {"title": "The Notebook", "rating": 2, "completed": False, "moodAtWatch": "Sad"},
]

ADMIN_SUMMARY = (
    "Name: Admin. Mood: Excited. Time of day: Evening. Prefers: MOVIES. "
    "Recently watched: Inception, Mad Max: Fury Road, John Wick. Rated highly: Inception, John Wick."
)
PARTH_SUMMARY = (
    "Name: Parth. Mood: Relaxed. Time of day: Evening. Prefers: MOVIES. "
    "Recently watched: The Shawshank Redemption, Little Women. Rated highly: The Shawshank Redemption."
)


def print_items(items: List[RecommendationItem]) -> None:
    """Pretty print a recommendation list."""
    print("\n" + "=" * 60)
    if not items:
        print("❌ No recommendations returned")
        print("=" * 60)
        return

    print(f"✅ {len(items)} recommendation(s):")
    print("=" * 60 + "\n")
    for i, item in enumerate(items, 1):
        print(f"--- #{i} ---")
        print(f"  Title:       {item.title}")
        print(f"  Platform:    {item.platform}")
        print(f"  Description: {item.description}")
        print(f"  Reason:      {item.reason}")
        print()


def print_analysis(analysis: WatchPatternAnalysis) -> None:
    """Pretty print a watch-pattern analysis."""
    print("\n" + "=" * 60)
    print(json.dumps(analysis.model_dump(by_alias=True), indent=2, ensure_ascii=False))
    print("=" * 60 + "\n")


async def run_mode(args: argparse.Namespace):
    """Run the mode selected on the command line."""
    if args.mode == "personalized":
        items = await generate_content_recommendations({
            "mood": args.mood,
            "timeOfDay": args.time,
            "viewingHistory": SAMPLE_HISTORY,
            "contentType": args.content_type,
        })
        print_items(items)
        return items

    if args.mode == "search":
        items = await generate_text_query_recommendations({
            "userQuery": args.query,
            "mood": args.mood,
            "timeOfDay": args.time,
            "viewingHistory": SAMPLE_HISTORY,
            "contentType": args.content_type,
            "language": args.language,
        })
        print_items(items)
        return items

    if args.mode == "surprise":
        items = await generate_surprise_recommendations({
            "viewingHistory": SAMPLE_HISTORY,
            "contentType": args.content_type,
        })
        print_items(items)
        return items

    if args.mode == "group":
        items = await generate_group_compromise_recommendations({
            "user1ProfileSummary": ADMIN_SUMMARY,
            "user2ProfileSummary": PARTH_SUMMARY,
            "currentTimeOfDay": args.time,
            "targetContentType": args.content_type,
        })
        print_items(items)
        return items

    analysis = await analyze_watch_patterns({
        "viewingHistory": SAMPLE_HISTORY,
        "currentMood": args.mood,
        "currentTime": args.time,
    })
    print_analysis(analysis)
    return analysis


async def run_suite():
    """Run the three reference scenarios and report pass/fail."""
    results = []

    print("\n[1/3] Search: 'a movie about a friendly robot' (MOVIES)")
    items = await generate_text_query_recommendations({
        "userQuery": "a movie about a friendly robot",
        "mood": "Happy",
        "timeOfDay": "Evening",
        "viewingHistory": SAMPLE_HISTORY,
        "contentType": "MOVIES",
    })
    print_items(items)
    results.append(("Search returns 6 items", len(items) == 6))

    print("\n[2/3] Surprise (BOTH)")
    items = await generate_surprise_recommendations({
        "viewingHistory": SAMPLE_HISTORY,
        "contentType": "BOTH",
    })
    print_items(items)
    results.append(("Surprise returns 6 items", len(items) == 6))

    print("\n[3/3] Group: Admin + Parth")
    items = await generate_group_compromise_recommendations({
        "user1ProfileSummary": ADMIN_SUMMARY,
        "user2ProfileSummary": PARTH_SUMMARY,
        "currentTimeOfDay": "Evening",
        "targetContentType": "MOVIES",
    })
    print_items(items)
    results.append((
        "Group reasons name Admin or Parth",
        bool(items) and all("Admin" in i.reason or "Parth" in i.reason for i in items),
    ))

    print("\n" + "=" * 60)
    for name, passed in results:
        print(f"   {'✅' if passed else '❌'} {name}")
    print("=" * 60 + "\n")


def main():
    parser = argparse.ArgumentParser(
        description="Try the recommendation modes against the live Gemini API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/try_recommendations.py search --query "a movie about a friendly robot"
  python scripts/try_recommendations.py personalized --mood Excited --time Night
  python scripts/try_recommendations.py --suite
        """
    )

    parser.add_argument(
        "mode",
        nargs="?",
        choices=["personalized", "search", "surprise", "group", "analysis"],
        default="search",
        help="Recommendation mode (default: search)"
    )
    parser.add_argument("--query", type=str, default="a movie about a friendly robot", help="Search text")
    parser.add_argument("--mood", choices=MOODS, default="Happy", help="Current mood")
    parser.add_argument("--time", choices=TIMES_OF_DAY, default="Evening", help="Time of day")
    parser.add_argument("--content-type", choices=CONTENT_TYPES, default="MOVIES", help="Content type")
    parser.add_argument("--language", type=str, default="Any", help="Preferred language (search only)")
    parser.add_argument("--suite", action="store_true", help="Run the reference scenarios")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if not os.getenv("GOOGLE_API_KEY"):
        print("\n⚠️  ERROR: GOOGLE_API_KEY environment variable not set!")
        print("   Please set it in your .env file or export it:")
        print("   export GOOGLE_API_KEY=your-gemini-api-key")
        sys.exit(1)

    try:
        if args.suite:
            asyncio.run(run_suite())
        else:
            asyncio.run(run_mode(args))
    except RecommendationError as e:
        logger.error(f"{type(e).__name__}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
