"""Preset configurations for common use cases."""

PRESETS = {
    "compact": {
        "description": "Bigram model with the smallest memory and file footprint",
        "order": 2,
        "smoothing": 0.1,
        "rationale": "Only one context table is kept, so files stay small and lookups are fast",
        "use_case": "Low-memory devices or very short typing histories",
    },
    "balanced": {
        "description": "Trigram model for general keyboard use",
        "order": 3,
        "smoothing": 0.1,
        "rationale": "Two words of context capture most short phrases without bloating the model",
        "use_case": "General-purpose next-word suggestions",
    },
    "contextual": {
        "description": "4-gram model that favours longer remembered phrases",
        "order": 4,
        "smoothing": 0.05,
        "rationale": "Longer contexts reproduce the user's habitual phrases; lower smoothing sharpens them",
        "use_case": "Users with a large typing history and repetitive phrasing",
    },
}


def get_preset(preset_name: str) -> dict:
    """
    Get preset configuration by name.

    Args:
        preset_name: Name of preset

    Returns:
        Dictionary with preset configuration

    Raises:
        ValueError: If preset_name is unknown

    Example:
        config = get_preset("compact")
        print(config["order"])  # 2
    """
    if preset_name not in PRESETS:
        available = ", ".join(sorted(PRESETS.keys()))
        raise ValueError(f"Unknown preset: '{preset_name}'. Available: {available}")

    return PRESETS[preset_name].copy()


def list_presets() -> list[str]:
    """List available preset names, sorted."""
    return sorted(PRESETS.keys())


def print_presets() -> None:
    """Print formatted table of all available presets."""
    print("\nAvailable Presets")
    print("=" * 80)
    print()

    for name in sorted(PRESETS.keys()):
        config = PRESETS[name]
        print(f"Preset: {name}")
        print("-" * 80)
        print(f"  Description:  {config['description']}")
        print(f"  Order:        {config['order']}")
        print(f"  Smoothing:    {config['smoothing']}")
        print(f"  Use case:     {config['use_case']}")
        print(f"  Rationale:    {config['rationale']}")
        print()
