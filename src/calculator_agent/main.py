from __future__ import annotations

import argparse
import asyncio
import json
import sys

from calculator_agent.config import configure_logging, load_settings
from calculator_agent.config.models import AVAILABLE_MODELS
from calculator_agent.errors import ConfigurationError, ProviderError
from calculator_agent.orchestrator import CalculatorAgent
from calculator_agent.tools.registry import ToolRegistry

EXAMPLE_PROMPTS: list[tuple[str, str]] = [
    ("Multiplication", "What is 15 times 23?"),
    (
        "Word problem",
        "If I have 100 dollars and buy 3 shirts that cost 25 dollars each, "
        "how much money do I have left?",
    ),
    ("Division by zero", "What is 15 divided by 0?"),
]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Ask the calculator agent an arithmetic question"
    )
    parser.add_argument("prompt", nargs="?", help="User message to send")
    parser.add_argument(
        "--examples", action="store_true", help="Run the built-in example prompts"
    )
    parser.add_argument(
        "--list-models", action="store_true", help="List catalogued models"
    )
    parser.add_argument(
        "--show-tools",
        action="store_true",
        help="Print the tool descriptors advertised to the model",
    )
    parser.add_argument("--model", help="Model id or catalog key for this run")
    parser.add_argument("--temperature", type=float, help="Sampling temperature (0-2)")
    parser.add_argument("--max-tokens", type=int, help="Max tokens in each reply")
    parser.add_argument(
        "--timeout-ms", type=int, help="Deadline for each provider round trip"
    )
    parser.add_argument(
        "--metadata",
        action="store_true",
        help="Print model, tool call and token usage details after the answer",
    )
    return parser


async def _run_prompts(
    agent: CalculatorAgent,
    prompts: list[tuple[str, str]],
    args: argparse.Namespace,
) -> None:
    for title, prompt in prompts:
        if title:
            print(f"=== {title} ===")
        print(f"[you] {prompt}")
        try:
            result = await agent.invoke_with_metadata(
                prompt,
                model=args.model,
                temperature=args.temperature,
                max_tokens=args.max_tokens,
                timeout_ms=args.timeout_ms,
            )
        except ProviderError as exc:
            print(f"[error] {exc}", file=sys.stderr)
            print()
            continue
        print(f"[agent] {result.response}")
        if args.metadata:
            print(
                f"[metadata] model={result.model} tool_calls={result.tool_calls_total} "
                f"llm_calls={result.llm_calls} tokens={result.usage.total_tokens}"
            )
        print()


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)

    if args.list_models:
        for key, config in AVAILABLE_MODELS.items():
            print(f"- {key}: {config.id} ({config.description})")
        return

    if args.show_tools:
        registry = ToolRegistry.discover()
        print(json.dumps([d.to_wire() for d in registry.descriptors()], indent=2))
        return

    if not args.prompt and not args.examples:
        raise SystemExit("Provide a prompt or use --examples / --list-models / --show-tools")

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        raise SystemExit(f"Configuration error: {exc}") from exc

    configure_logging(settings.log_level)
    agent = CalculatorAgent(settings)
    prompts = EXAMPLE_PROMPTS if args.examples else [("", args.prompt)]
    asyncio.run(_run_prompts(agent, prompts, args))


if __name__ == "__main__":
    main()
