"""
dataset.py - Reads exported recordings back from the data folder

Usage:
    from dataset import load_example, dataset_stats

    keypoints, left, right = load_example("data/0_hello/20240101-120000_0_worker")
    stats = dataset_stats("data")
"""

import logging
import os

import cv2
import numpy as np
import pandas as pd

import config
from skeletal_points import SPOINT_SIZE, spoint_columns

logger = logging.getLogger(__name__)


def read_header(path):
    """`# key: value` comment lines at the top of a keypoint log"""
    header = {}
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.startswith("#"):
                break
            key, _, value = line[1:].partition(":")
            header[key.strip()] = value.strip()
    return header


def load_keypoints(path):
    """Keypoint log as a DataFrame, one row per standardized frame"""
    return pd.read_csv(path, comment="#")


def keypoint_array(df):
    """(frames, SPOINT_SIZE, 3) landmark array from a keypoint DataFrame"""
    return df[spoint_columns()].to_numpy(dtype=np.float64).reshape(len(df), SPOINT_SIZE, 3)


def load_images(path, start, count):
    images = []
    for i in range(start, start + count):
        filename = os.path.join(path, f"{i}{config.IMAGE_EXT}")
        image = cv2.imread(filename)
        if image is None:
            logger.warning(f"Missing crop {filename}")
            continue
        images.append(image)
    return np.stack(images) if images else np.empty((0, config.IMAGE_HEIGHT, config.IMAGE_WIDTH, 3), np.uint8)


def load_example(path, image_count=config.IMAGE_STANDARD_FRAME_SIZE):
    """
    Load one exported recording

    Args:
        path: example directory holding Spoints.txt and the numbered crops
        image_count: crops per hand (right hand numbering starts here)

    Returns:
        (keypoints, left_images, right_images) where keypoints is the
        DataFrame of the log and the image stacks are (N, H, W, 3) uint8
    """
    keypoints = load_keypoints(os.path.join(path, config.KEYPOINT_FILE))
    left = load_images(path, 0, image_count)
    right = load_images(path, image_count, image_count)
    return keypoints, left, right


def iter_examples(root=config.PATH_DATA_FOLDER):
    """Yield (label_dir, example_dir) for every persisted example under root"""
    if not os.path.isdir(root):
        return
    for label_dir in sorted(os.listdir(root)):
        label_path = os.path.join(root, label_dir)
        if not os.path.isdir(label_path) or label_dir == config.TEMP_FOLDER:
            continue
        for example_dir in sorted(os.listdir(label_path)):
            example_path = os.path.join(label_path, example_dir)
            if os.path.isfile(os.path.join(example_path, config.KEYPOINT_FILE)):
                yield label_dir, example_path


def dataset_stats(root=config.PATH_DATA_FOLDER):
    """Example counts per label directory and per worker"""
    rows = []
    for label_dir, example_path in iter_examples(root):
        header = read_header(os.path.join(example_path, config.KEYPOINT_FILE))
        rows.append({
            "label": label_dir,
            "worker": header.get("worker", ""),
            "frames": int(header.get("frames", 0)),
            "path": example_path,
        })
    df = pd.DataFrame(rows, columns=["label", "worker", "frames", "path"])
    return {
        "num_examples": int(len(df)),
        "labels": df["label"].value_counts().sort_index().to_dict(),
        "workers": df["worker"].value_counts().sort_index().to_dict(),
        "frame_counts": df["frames"].value_counts().sort_index().to_dict(),
        "examples": df,
    }
