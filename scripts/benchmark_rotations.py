"""
Benchmark: rebalancing cost of the augmented AVL tree
-----------------------------------------------------
Inserts num-data keys in the chosen order, then deletes all of them in a random order, and reports the average
number of rotations per operation along with the elapsed time. Each round uses a fresh tree.
"""
import argparse
import os
import random
import sys
import time
from typing import Dict, List

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from augavl.dependency import AVLTree


def positive_int(text: str) -> int:
    """Argparse type for counts that must be at least 1."""
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def make_keys(num_data: int, order: str, rng: random.Random) -> List[int]:
    """Create the keys 1..num_data in the requested insertion order."""
    keys = list(range(1, num_data + 1))
    if order == "random":
        rng.shuffle(keys)
    elif order == "descending":
        keys.reverse()
    return keys


def run_round(num_data: int, order: str, rng: random.Random) -> Dict[str, float]:
    tree = AVLTree()
    keys = make_keys(num_data=num_data, order=order, rng=rng)

    start_time = time.time()
    insert_rotations = sum(tree.insert(key=key, value=key) for key in keys)
    insert_time = time.time() - start_time

    # Deletions always happen in a random order.
    rng.shuffle(keys)
    start_time = time.time()
    delete_rotations = sum(tree.delete(key=key) for key in keys)
    delete_time = time.time() - start_time

    return {
        "insert_rotations": insert_rotations / num_data,
        "delete_rotations": delete_rotations / num_data,
        "insert_time": insert_time,
        "delete_time": delete_time,
    }


def main():
    parser = argparse.ArgumentParser(description="Measure AVL tree rotations per insert and delete")
    parser.add_argument("--num-data", type=positive_int, default=10000, help="Number of keys inserted per round")
    parser.add_argument("--rounds", type=positive_int, default=5, help="Number of rounds")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--order", choices=["random", "ascending", "descending"], default="random",
                        help="Insertion order of the keys")

    args = parser.parse_args()
    rng = random.Random(args.seed)

    print(f"[*] N={args.num_data}, rounds={args.rounds}, order={args.order}\n")
    print(f"{'round':<8} {'ins rot/op':<12} {'del rot/op':<12} {'ins time':<12} {'del time':<12}")
    print("-" * 56)

    results = []
    for index in range(1, args.rounds + 1):
        result = run_round(num_data=args.num_data, order=args.order, rng=rng)
        results.append(result)
        print(f"{index:<8} {result['insert_rotations']:<12.4f} {result['delete_rotations']:<12.4f} "
              f"{result['insert_time']:<12.4f} {result['delete_time']:<12.4f}")

    print("-" * 56)
    averages = {name: sum(result[name] for result in results) / len(results) for name in results[0]}
    print(f"{'avg':<8} {averages['insert_rotations']:<12.4f} {averages['delete_rotations']:<12.4f} "
          f"{averages['insert_time']:<12.4f} {averages['delete_time']:<12.4f}")


if __name__ == "__main__":
    main()
