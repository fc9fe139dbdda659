"""Console front end: type commands, see the resolved intent and result."""

import argparse
import asyncio
import json
from typing import Optional, Sequence

from dotenv import load_dotenv
from colorama import Fore, Style, init as colorama_init

from .core.config import IntentConfig
from .io import ConsoleInput, ConsoleOutput, InputHandler, OutputHandler
from .logging import IntentLogger
from .nlu import detect_language
from .pipeline import IntentPipeline, PipelineResult
from .prompt import PromptContext

EXIT_COMMANDS = {"exit", "quit"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intentpy", description="Turn natural-language commands into intents."
    )
    parser.add_argument("--provider", help="Language model provider (openai, anthropic, mock)")
    parser.add_argument("--model", help="Model name passed to the provider")
    parser.add_argument("--max-retries", type=int, help="Retries after the first attempt")
    parser.add_argument("--min-confidence", type=float, help="Confidence floor in [0, 1]")
    parser.add_argument("--page", help="Current page reported in the prompt context")
    parser.add_argument("--history", action="store_true", help="Include recent history in prompts")
    parser.add_argument("--verbose", action="store_true", help="Show INFO logs")
    parser.add_argument("command", nargs="*", help="Run a single command and exit")
    return parser


def build_config(args: argparse.Namespace) -> IntentConfig:
    config = IntentConfig.from_env()
    if args.provider:
        config.ai_provider = args.provider
    if args.model:
        config.model = args.model
    if args.max_retries is not None:
        config.max_retries = args.max_retries
    if args.min_confidence is not None:
        config.min_confidence = args.min_confidence
    if args.page:
        config.default_context = PromptContext(page=args.page)
    if args.history:
        config.prompt.include_history = True
    config.verbose = config.verbose or args.verbose
    return config


async def _display_result(result: PipelineResult, output: OutputHandler) -> None:
    if result.intent is not None:
        await output.send_output(
            f"{Fore.CYAN}intent:{Style.RESET_ALL} {json.dumps(result.intent.to_dict())}"
        )
    if result.success:
        data = result.execution.data if result.execution else None
        await output.send_output(f"{Fore.GREEN}ok:{Style.RESET_ALL} {json.dumps(data, default=str)}")
    else:
        await output.send_output(f"{Fore.RED}error:{Style.RESET_ALL} {result.error}")


async def run_repl(
    pipeline: IntentPipeline,
    input_handler: InputHandler,
    output: OutputHandler,
) -> None:
    await output.send_output("Type a command, or 'exit' to quit.")
    while True:
        text = (await input_handler.get_input("> ")).strip()
        if not text or text.lower() in EXIT_COMMANDS:
            break
        if detect_language(text) != "en":
            await output.send_output(f"{Fore.YELLOW}note:{Style.RESET_ALL} input does not look like English")
        result = await pipeline.process(text)
        await _display_result(result, output)


async def _main(args: argparse.Namespace) -> int:
    config = build_config(args)
    pipeline = IntentPipeline(config, logger=IntentLogger(verbose=config.verbose))
    output = ConsoleOutput()
    if args.command:
        result = await pipeline.process(" ".join(args.command))
        await _display_result(result, output)
        return 0 if result.success else 1
    await run_repl(pipeline, ConsoleInput(), output)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    colorama_init()
    args = _build_parser().parse_args(argv)
    return asyncio.run(_main(args))


if __name__ == "__main__":
    raise SystemExit(main())
