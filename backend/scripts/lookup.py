#!/usr/bin/env python3
"""
Run a progressive lookup from the terminal.

Prints every snapshot the pipeline publishes: the coarse translation,
then the word breakdown, then synonyms when they arrive.

Usage:
    cd backend
    python scripts/lookup.py สวัสดี
    python scripts/lookup.py "good morning" --json
"""

import argparse
import asyncio
import sys

from thaimaster.core.lookup import LookupPipelineFactory, PipelineSnapshot, PipelineState


def format_snapshot(snapshot: PipelineSnapshot) -> str:
    lines = [f"[{snapshot.state.value}] {snapshot.query}"]
    if snapshot.error:
        lines.append(f"  error: {snapshot.error}")

    result = snapshot.result
    if result is None:
        return "\n".join(lines)

    lines.append(f"  {result.translated_text}  ({result.transliteration})")
    for segment in result.segments:
        line = f"    {segment.text}  {segment.transliteration}  {segment.gloss}  [{segment.part_of_speech}]"
        if segment.synonyms:
            line += f"  ~ {', '.join(segment.synonyms)}"
        lines.append(line)
    if result.example_sentence_thai:
        lines.append(f"  e.g. {result.example_sentence_thai}")
        lines.append(f"       {result.example_sentence_english}")
    return "\n".join(lines)


async def run(query: str, as_json: bool) -> int:
    pipeline = LookupPipelineFactory.create()
    queue = pipeline.tracker.subscribe()

    await pipeline.lookup(query)
    await pipeline.wait_idle()

    while not queue.empty():
        snapshot = queue.get_nowait()
        print(snapshot.model_dump_json(indent=2) if as_json else format_snapshot(snapshot))

    return 1 if pipeline.state == PipelineState.ERROR else 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Look up a Thai or English word")
    parser.add_argument("query", help="Word or phrase to look up")
    parser.add_argument("--json", action="store_true", help="Print raw snapshots as JSON")
    args = parser.parse_args()

    if not args.query.strip():
        print("Nothing to look up")
        return 2

    return asyncio.run(run(args.query, args.json))


if __name__ == "__main__":
    sys.exit(main())
