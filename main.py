#!/usr/bin/env python3
"""
main.py - Webcam gesture recorder

Runs the pose sensor through the pipeline and shows the overlay.

Keys:
    q   quit
    n/b next/previous label
    m   cycle mode (off -> predict -> output)
"""

import argparse
import logging

import cv2

import config
from exporter import Exporter
from label_mapper import LabelMapper
from overlay import render
from pipeline import GesturePipeline
from pose_sensor import PoseSensor
from recorder import MODE_ORDER, RecordingMode, RecordingSession

logger = logging.getLogger(__name__)

WINDOW_NAME = "Gesture recorder"


def handle_key(key, session, labels):
    """Returns False when the loop should stop"""
    if key == ord("q"):
        return False
    if key == ord("n"):
        session.set_label(labels.next_id(session.label, 1))
        logger.info(f"Label {session.label} {session.label_name}")
    elif key == ord("b"):
        session.set_label(labels.next_id(session.label, -1))
        logger.info(f"Label {session.label} {session.label_name}")
    elif key == ord("m"):
        mode = MODE_ORDER[(MODE_ORDER.index(session.mode) + 1) % len(MODE_ORDER)]
        session.set_mode(mode)
        logger.info(f"Mode {mode.value}")
    return True


def parse_args():
    ap = argparse.ArgumentParser()
    ap.add_argument("--mode", choices=[m.value for m in RecordingMode], default=RecordingMode.OFF.value)
    ap.add_argument("--label", type=int, default=0, help="label id")
    ap.add_argument("--label-name", help="label name, looked up in the label file")
    ap.add_argument("--worker", default=config.DEFAULT_WORKER, help="operator name")
    ap.add_argument("--data-dir", default=config.PATH_DATA_FOLDER)
    ap.add_argument("--labels", help="label csv (default: <data-dir>/labels.csv)")
    ap.add_argument("--camera", type=int, default=config.CAMERA_INDEX)
    ap.add_argument("--model", default=config.POSE_MODEL_PATH, help="pose_landmarker .task file")
    ap.add_argument("--no-window", action="store_true", help="run without the preview window")
    ap.add_argument("--verbose", action="store_true")
    return ap.parse_args()


def main():
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    labels = LabelMapper.load(args.labels or f"{args.data_dir}/{config.FILE_LABEL}")
    label = labels.id(args.label_name) if args.label_name else args.label

    session = RecordingSession(
        Exporter(args.data_dir),
        mode=RecordingMode(args.mode),
        label=label,
        labels=labels,
        worker=args.worker,
    )

    with PoseSensor(args.camera, args.model) as sensor:
        pipeline = GesturePipeline(session, on_identity_change=sensor.bind_tracking_id)
        logger.info(f"Mode {session.mode.value}, label {session.label} {session.label_name}")

        try:
            while True:
                tick = sensor.read()
                if tick is None:
                    logger.warning("Failed to grab frame")
                    break
                pipeline.process(tick)

                if args.no_window:
                    continue
                frame = render(tick, pipeline)
                if frame is not None:
                    cv2.imshow(WINDOW_NAME, frame)
                key = cv2.waitKey(1) & 0xFF
                if not handle_key(key, session, labels):
                    break
        except KeyboardInterrupt:
            logger.info("Interrupted")
        finally:
            cv2.destroyAllWindows()

    logger.info(f"{session.recorded} recordings exported")


if __name__ == "__main__":
    main()
