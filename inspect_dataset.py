#!/usr/bin/env python3
# prints stats for a recorded gesture dataset and plots wrist trajectories of one example

import argparse
import logging
import sys

import matplotlib.pyplot as plt
import pandas as pd

import config
from dataset import dataset_stats, load_example
from skeletal_points import SPointType

logger = logging.getLogger(__name__)


def print_stats(stats, stream=sys.stdout):
    print(f"examples: {stats['num_examples']}", file=stream)
    with pd.option_context("display.max_columns", None, "display.width", 200):
        print("\nper label", file=stream)
        print(pd.Series(stats["labels"], dtype=int).to_string(), file=stream)
        print("\nper worker", file=stream)
        print(pd.Series(stats["workers"], dtype=int).to_string(), file=stream)
        print("\nframes per example", file=stream)
        print(pd.Series(stats["frame_counts"], dtype=int).to_string(), file=stream)


def plot_wrists(keypoints, title=""):
    fig, axes = plt.subplots(3, 1, figsize=(12, 9), sharex=True)
    t = keypoints["timestamp"].to_numpy()
    for spoint, color in ((SPointType.BODY_WRIST_LEFT, "tab:blue"), (SPointType.BODY_WRIST_RIGHT, "tab:red")):
        for ax, axis in zip(axes, "xyz"):
            ax.plot(t, keypoints[f"{spoint.name}_{axis}"], color=color, marker=".", label=spoint.name)
            ax.set_ylabel(f"{axis} (m)")
            ax.grid(True, alpha=0.3)
    axes[0].legend()
    axes[0].set_title(title)
    axes[-1].set_xlabel("timestamp (ms)")
    plt.tight_layout()
    return fig


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--data-dir", default=config.PATH_DATA_FOLDER, help="dataset root")
    ap.add_argument("--example", help="example directory to plot")
    ap.add_argument("--out", help="save the plot here instead of showing it")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    stats = dataset_stats(args.data_dir)
    print_stats(stats)

    if args.example:
        keypoints, left, right = load_example(args.example)
        logger.info(f"{len(keypoints)} frames, {len(left)} left crops, {len(right)} right crops")
        fig = plot_wrists(keypoints, args.example)
        if args.out:
            fig.savefig(args.out)
        else:
            plt.show()


if __name__ == "__main__":
    main()
