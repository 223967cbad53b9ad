import asyncio
import sys
import threading
import time

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from config.config import Config
from server.dependencies import build_orchestrator


def show_loading_animation(stop_event: threading.Event) -> None:
    """
    Show a loading animation in the console.

    Args:
        stop_event: A threading.Event that will be set to stop the animation
    """
    while not stop_event.is_set():
        for char in '|/-\\':
            if stop_event.is_set():
                break
            sys.stdout.write(f'\r\033[93mLooking it up {char}\033[0m')
            sys.stdout.flush()
            time.sleep(0.1)

    # Clear the loading line
    sys.stdout.write('\r' + ' ' * 20 + '\r')
    sys.stdout.flush()


def print_result(result) -> None:
    print(f"\nScout: {result.answer}")
    if result.links:
        print("\nSources:")
        for index, link in enumerate(result.links, start=1):
            print(f"  [{index}] {link.title} - {link.url}")
    print()


def main():
    try:
        config = Config()
        orchestrator = build_orchestrator(config)
    except ValueError as e:  # ConfigurationError included
        print(f"Error initializing: {str(e)}")
        return

    print(f"\n=== Sports Scout ({config.get_model_info()}, {orchestrator.retriever.name}) ===")
    print("Ask about NBA or NFL games, scores and stats. Type 'exit' to quit.")
    print("Each question is answered on its own; nothing is remembered between questions.\n")

    while True:
        try:
            user_input = input("You: ").strip()

            if not user_input:
                continue

            if user_input.lower() in ('exit', 'quit'):
                print("\nGoodbye!")
                break

            stop_animation = threading.Event()
            loading_thread = threading.Thread(target=show_loading_animation, args=(stop_animation,))
            loading_thread.daemon = True
            loading_thread.start()

            try:
                result = asyncio.run(orchestrator.ask(user_input))
            finally:
                stop_animation.set()
                loading_thread.join()

            print_result(result)

        except KeyboardInterrupt:
            print("\nExiting...")
            break
        except Exception as e:
            print(f"\nError: {str(e)}")
            continue


if __name__ == "__main__":
    main()
