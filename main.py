#!/usr/bin/env python3
"""NFT Intelligence Assistant CLI."""

import argparse
import logging
import sys
from config.settings import Settings
from schemas.context import Platform
from orchestrator import NFTIntelligenceOrchestrator


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="NFT Intelligence Assistant - AI-powered NFT and wallet analysis"
    )
    parser.add_argument(
        "--question",
        "-q",
        type=str,
        help="Single question to ask (omit for an interactive session)"
    )
    parser.add_argument(
        "--user-id",
        "-u",
        type=str,
        default="cli-user",
        help="User identifier for conversation memory (default: cli-user)"
    )
    parser.add_argument(
        "--provider",
        type=str,
        choices=["openai", "anthropic"],
        help="LLM provider (default: from environment, else openai)"
    )
    parser.add_argument(
        "--classifier",
        type=str,
        choices=["auto", "keyword", "llm"],
        help="Intent classifier (default: auto)"
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Use fabricated demo analytics instead of the live API"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output"
    )

    args = parser.parse_args()

    overrides = {"verbose": args.verbose}
    if args.provider:
        overrides["llm_provider"] = args.provider
    if args.classifier:
        overrides["classifier_mode"] = args.classifier
    if args.demo:
        overrides["use_demo_analytics"] = True

    settings = Settings.from_env(**overrides)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    orchestrator = NFTIntelligenceOrchestrator(settings=settings)

    try:
        if args.question:
            _ask(orchestrator, args.question, args.user_id, args.verbose)
        else:
            _interactive(orchestrator, args.user_id, args.verbose)
    except KeyboardInterrupt:
        print()
    except Exception as e:
        print(f"Error processing question: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


def _ask(orchestrator: NFTIntelligenceOrchestrator, question: str, user_id: str, verbose: bool):
    result = orchestrator.process_query(question, user_id, Platform.CLI)
    if verbose and result.intent:
        print(f"[intent: {result.intent.type.value}, confidence: {result.confidence:.2f}]")
    print("\n" + result.response + "\n")
    if result.error:
        sys.exit(1)


def _interactive(orchestrator: NFTIntelligenceOrchestrator, user_id: str, verbose: bool):
    print("NFT Intelligence Assistant. Commands: /history, /context, /clear, /quit")
    while True:
        try:
            line = input("> ").strip()
        except EOFError:
            break

        if not line:
            continue
        if line in ("/quit", "/exit"):
            break
        if line == "/clear":
            cleared = orchestrator.clear_memory(user_id, Platform.CLI)
            print("Memory cleared." if cleared else "Nothing to clear.")
            continue
        if line == "/history":
            for interaction in orchestrator.get_conversation_history(user_id, Platform.CLI):
                print(f"[{interaction.timestamp:%H:%M:%S}] {interaction.user_query}")
            continue
        if line == "/context":
            summary = orchestrator.context_manager.get_conversation_context_string(user_id, Platform.CLI)
            print(summary or "No history yet.")
            continue

        result = orchestrator.process_query(line, user_id, Platform.CLI)
        if verbose and result.intent:
            print(f"[intent: {result.intent.type.value}, confidence: {result.confidence:.2f}]")
        print("\n" + result.response + "\n")


if __name__ == "__main__":
    main()
