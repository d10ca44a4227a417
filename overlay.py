"""
overlay.py - Status text, skeletal points and hand crop previews on the colour frame
"""

import cv2
import numpy as np

from skeletal_points import SPointType

PREVIEW_SIZE = 256

POINT_COLOR = (255, 255, 255)
ACTIVE_COLOR = (0, 255, 0)
IDLE_COLOR = (0, 0, 255)
TEXT_COLOR = (0, 255, 255)


def draw_spoints(frame, spoints, mapper, l_activated=False, r_activated=False):
    """Project every landmark onto the frame; wrists turn green while activated"""
    if mapper is None:
        return frame
    wrist_state = {
        SPointType.BODY_WRIST_LEFT: l_activated,
        SPointType.BODY_WRIST_RIGHT: r_activated,
    }
    h, w = frame.shape[:2]
    for spoint in SPointType:
        px = mapper.map_camera_to_color(spoints[spoint])
        if not np.all(np.isfinite(px)):
            continue
        x, y = int(px[0]), int(px[1])
        if not (0 <= x < w and 0 <= y < h):
            continue
        if spoint in wrist_state:
            color = ACTIVE_COLOR if wrist_state[spoint] else IDLE_COLOR
            cv2.circle(frame, (x, y), 8, color, -1)
        else:
            cv2.circle(frame, (x, y), 4, POINT_COLOR, -1)
    return frame


def draw_previews(frame, left, right, size=PREVIEW_SIZE):
    """Paste both hand crops, enlarged, into the top-right corner (left crop outermost)"""
    h, w = frame.shape[:2]
    for i, crop in enumerate((right, left)):
        if crop is None:
            continue
        x0 = w - (i + 1) * size
        if x0 < 0 or size > h:
            break
        preview = cv2.resize(crop, (size, size))
        if frame.ndim == 3 and frame.shape[2] == 4:
            preview = cv2.cvtColor(preview, cv2.COLOR_BGR2BGRA)
        frame[0:size, x0:x0 + size] = preview
    return frame


def status_lines(status, mode, label, label_name, fps=True):
    lines = [
        f"mode: {mode.value}",
        f"label: {label} {label_name}",
        f"distance: {status.distance:.2f} m",
        f"spine: {status.spine_scale:.3f} m / {status.spine_scale_px:.1f} px",
        f"activated: L={int(status.l_activated)} R={int(status.r_activated)}",
        f"recording: {int(status.recording)}  stacked: {status.stacked}",
        f"sent: {status.recorded}",
    ]
    if fps:
        lines.append(f"FPS: {int(status.fps)}")
    if not status.tracked:
        lines.append("no body tracked")
    return lines


def draw_status(frame, lines, origin=(10, 30), line_height=25):
    x, y = origin
    for line in lines:
        cv2.putText(frame, line, (x, y), cv2.FONT_HERSHEY_SIMPLEX, 0.6, TEXT_COLOR, 2)
        y += line_height
    return frame


def render(tick, pipeline):
    """Compose the display frame for one processed tick"""
    if tick.color_image is None:
        return None
    frame = tick.color_image.copy()
    status = pipeline.status
    session = pipeline.session
    if status.tracked:
        draw_spoints(frame, pipeline.spoints, tick.mapper, status.l_activated, status.r_activated)
    draw_previews(frame, pipeline.roi.left, pipeline.roi.right)
    draw_status(frame, status_lines(status, session.mode, session.label, session.label_name))
    return frame
