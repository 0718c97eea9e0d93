"""Main script for running the fact guard pipeline from a terminal."""

import argparse
import asyncio
import logging

from .domain.errors import FactGuardError
from .domain.models.fact_check_issue import CheckMode, DetailedResult
from .infrastructure.dependencies import ServiceContainer


def print_response(response) -> None:
    """Print a fact-check response in a readable form."""
    result = response.result
    print("\nResults:")
    print(f"Mode: {response.mode.value}  Cached: {response.cached}  Time: {response.processing_time:.0f} ms")
    if isinstance(result, DetailedResult):
        print(f"\nSummary: {result.summary}")

    if not result.issues:
        print("\nNo factual issues found.")
        return

    print("\nIssues:")
    for i, issue in enumerate(result.issues, 1):
        print(f"{i}. \"{issue.text}\"")
        print(f"   Problem: {issue.issue_description}")
        print(f"   Suggestion: {issue.suggestion}")

    if isinstance(result, DetailedResult) and result.verification_needed:
        print("\nNeeds verification:")
        for item in result.verification_needed:
            print(f"- {item}")


async def main(mode: CheckMode = CheckMode.REALTIME):
    """Run the fact guard pipeline interactively."""
    print("Fact Guard - fact checking with web cross-verification")
    print("------------------------------------------------------")

    container = ServiceContainer()
    await container.start()

    try:
        service = container.get_fact_checking_service()
        while True:
            # Get text from user
            text = input("\nEnter text to fact-check (or 'quit' to exit): ")
            if text.lower() in ('quit', 'exit', 'q'):
                break

            print("\nChecking facts...")
            try:
                response = await service.fact_check(text, mode, user_id="cli")
                print_response(response)
            except FactGuardError as e:
                print(f"\nError checking facts: {e}")

    finally:
        # Clean up
        await container.shutdown()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Interactive fact checking")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in CheckMode],
        default=CheckMode.REALTIME.value,
        help="Check mode",
    )
    parser.add_argument("--verbose", action="store_true", help="Show pipeline logs")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    asyncio.run(main(CheckMode(args.mode)))
