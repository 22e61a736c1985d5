"""Debug and interactive tools for predictors"""

from nextword.predictor import format_model_info


def print_predictions(predictions: list) -> None:
    """Print (word, probability) pairs, one per line, tab separated."""
    for word, prob in predictions:
        print(f"{word}\t{prob:.6f}")


def interactive_predict(predictor, k: int = 3) -> None:
    """Start an interactive session that suggests next words as you type.

    Args:
        predictor: TextPredictor instance
        k: Number of suggestions per line
    """
    print("Next-Word Prediction Interactive Mode")
    print("=" * 50)
    print("Commands:")
    print("  <text>      - Suggest the next word after text")
    print("  /add <text> - Add text to the typing history")
    print("  /train      - Train on the history now and save")
    print("  /clear      - Discard the typing history")
    print("  /info       - Show model information")
    print("  /quit       - Exit")
    print()

    while True:
        try:
            command = input("predict> ").strip()

            if command.lower() in ["/quit", "/exit", "/q", "quit", "exit", "q"]:
                print("Goodbye!")
                break
            elif command.lower() in ["/info", "info"]:
                print(format_model_info(predictor.get_model_info()))
                print()
            elif command.lower().startswith("/add "):
                predictor.add_to_history(command[5:])
                print(f"History entries: {predictor.history_size}")
            elif command.lower() == "/train":
                if predictor.force_training():
                    print(f"Model trained and saved to {predictor.model_path}")
                else:
                    print("Nothing was saved (empty history or save failed)")
            elif command.lower() == "/clear":
                predictor.clear_history()
                print("History cleared")
            elif command.startswith("/"):
                print(f"Unknown command: {command}")
            else:
                predictions = predictor.predict(command, k)
                if predictions:
                    print_predictions(predictions)
                else:
                    print("No suggestions (model is empty)")

        except EOFError:
            print("\nGoodbye!")
            break
        except KeyboardInterrupt:
            print("\nGoodbye!")
            break
