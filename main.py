"""
Bonsai - Growth Demo

Grows a seeded bonsai stage by stage:
1. Builds the full tree once
2. Calls grow() until it reports full growth, printing what becomes visible
3. Saves the final snapshot and a panel per growth stage
4. Resets and shows that the new tree starts from the trunk again
"""

import argparse
from pathlib import Path

from bonsai import Bonsai, BonsaiConfig
from bonsai.preview import save_elements, save_growth_sequence

PRESETS = {
    "classic": BonsaiConfig.classic,
    "windswept": BonsaiConfig.windswept,
    "flourishing": BonsaiConfig.flourishing,
}


def run_growth(bonsai: Bonsai) -> None:
    """Grow to full size, printing the visible counts at each stage."""
    print(f"Growing bonsai ({bonsai.max_growth} stages)...")
    elements = bonsai.get_visible_elements()
    print(f"  Stage {bonsai.stage:2d}: branches={len(elements.branches):4d}, leaves={len(elements.leaves):4d}")

    while bonsai.grow():
        elements = bonsai.get_visible_elements()
        print(f"  Stage {bonsai.stage:2d}: branches={len(elements.branches):4d}, leaves={len(elements.leaves):4d}")

    print(f"Fully grown: grow() now returns {bonsai.grow()}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Grow a procedural bonsai and save previews.")
    parser.add_argument('--width', type=float, default=400.0, help='Canvas width')
    parser.add_argument('--height', type=float, default=300.0, help='Canvas height')
    parser.add_argument('--seed', type=int, default=42, help='Random seed')
    parser.add_argument('--preset', choices=sorted(PRESETS), default='classic', help='Configuration preset')
    parser.add_argument('--output-dir', type=str, default='outputs', help='Directory for preview images')
    args = parser.parse_args()

    print("\n" + "=" * 60)
    print("  BONSAI: Procedural Growth Demo")
    print("=" * 60)

    config = PRESETS[args.preset]()
    bonsai = Bonsai(args.width, args.height, config, seed=args.seed)
    bonsai.skeleton.print_summary()

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    save_growth_sequence(str(output_dir / f"bonsai_{args.preset}_{args.seed}_stages.png"), bonsai)
    save_elements(str(output_dir / f"bonsai_{args.preset}_{args.seed}.png"), bonsai)

    print("\nResetting...")
    bonsai.reset()
    elements = bonsai.get_visible_elements()
    print(f"  Stage {bonsai.stage}: branches={len(elements.branches)}, leaves={len(elements.leaves)}")
    run_growth(bonsai)
    bonsai.skeleton.print_summary()


if __name__ == "__main__":
    main()
