#!/usr/bin/env python
"""
Example: Simulated keyboard session with a persisted predictor.

This demonstrates how to:
1. Create a predictor pre-trained on the bundled sample texts
2. Ask for suggestions while "typing"
3. Feed typed messages back as history until retraining kicks in
4. Reopen the saved model in a new predictor
"""

import os
import sys
import tempfile

from nextword import TextPredictor, format_model_info, load_sample_texts

MESSAGES = [
    "see you at the station",
    "see you at the gym tonight",
    "running late, see you at the cafe",
]


def main():
    model_path = sys.argv[1] if len(sys.argv) > 1 else os.path.join(tempfile.mkdtemp(), "keyboard.bin")

    print("=" * 70)
    print("Keyboard Session Example")
    print("=" * 70)

    # Step 1: Load or create the model (samples only used for a new model)
    predictor = TextPredictor(model_path, order=3, sample_texts=load_sample_texts(), history_threshold=3)
    print(format_model_info(predictor.get_model_info()))

    # Step 2: Suggestions before learning the user's habits
    print("\n>>> Suggestions after 'see you':")
    for word, prob in predictor.predict("see you", 3):
        print(f"  {word:12} {prob:.4f}")

    # Step 3: Type messages; the third one reaches the threshold and retrains
    print("\n>>> Typing messages...")
    for message in MESSAGES:
        predictor.add_to_history(message)
        print(f"  typed: {message!r} (history: {predictor.history_size})")

    print("\n>>> Suggestions after 'see you' (retrained):")
    for word, prob in predictor.predict("see you", 3):
        print(f"  {word:12} {prob:.4f}")

    # Step 4: A new predictor picks up the saved model
    reopened = TextPredictor(model_path)
    print(f"\n>>> Reopened {model_path}")
    print(format_model_info(reopened.get_model_info()))


if __name__ == "__main__":
    main()
