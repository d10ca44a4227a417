"""
pose_sensor.py - Webcam stand-in for a depth sensor using the MediaPipe Pose Landmarker

Each detected person becomes a Kinect-style Body. Depth is estimated from the
shoulder width in pixels (similar triangles) and every landmark is
back-projected with the same pinhole model the pipeline uses for cropping,
so projected hand positions line up with the colour frame.
"""

import logging
import os
import time

import cv2
import mediapipe as mp
import numpy as np
from mediapipe.tasks import python
from mediapipe.tasks.python import vision

import config
from sensor import Body, Joint, JointType, PinholeMapper, SensorSource, SensorTick, TrackingState
from skeletal_points import SPointType

logger = logging.getLogger(__name__)

# MediaPipe pose landmark indices
NOSE = 0
LEFT_EYE, RIGHT_EYE = 2, 5
LEFT_EAR, RIGHT_EAR = 7, 8
MOUTH_LEFT, MOUTH_RIGHT = 9, 10
LEFT_SHOULDER, RIGHT_SHOULDER = 11, 12
LEFT_ELBOW, RIGHT_ELBOW = 13, 14
LEFT_WRIST, RIGHT_WRIST = 15, 16
LEFT_PINKY, RIGHT_PINKY = 17, 18
LEFT_INDEX, RIGHT_INDEX = 19, 20
LEFT_THUMB, RIGHT_THUMB = 21, 22
LEFT_HIP, RIGHT_HIP = 23, 24
LEFT_KNEE, RIGHT_KNEE = 25, 26
LEFT_ANKLE, RIGHT_ANKLE = 27, 28
LEFT_FOOT, RIGHT_FOOT = 31, 32

# sensor joint <- one or more pose landmarks (averaged)
JOINT_LANDMARKS = {
    JointType.SPINE_BASE: (LEFT_HIP, RIGHT_HIP),
    JointType.SPINE_SHOULDER: (LEFT_SHOULDER, RIGHT_SHOULDER),
    JointType.HEAD: (LEFT_EAR, RIGHT_EAR),
    JointType.SHOULDER_LEFT: (LEFT_SHOULDER,),
    JointType.ELBOW_LEFT: (LEFT_ELBOW,),
    JointType.WRIST_LEFT: (LEFT_WRIST,),
    JointType.HAND_LEFT: (LEFT_WRIST, LEFT_INDEX, LEFT_PINKY),
    JointType.HAND_TIP_LEFT: (LEFT_INDEX,),
    JointType.THUMB_LEFT: (LEFT_THUMB,),
    JointType.SHOULDER_RIGHT: (RIGHT_SHOULDER,),
    JointType.ELBOW_RIGHT: (RIGHT_ELBOW,),
    JointType.WRIST_RIGHT: (RIGHT_WRIST,),
    JointType.HAND_RIGHT: (RIGHT_WRIST, RIGHT_INDEX, RIGHT_PINKY),
    JointType.HAND_TIP_RIGHT: (RIGHT_INDEX,),
    JointType.THUMB_RIGHT: (RIGHT_THUMB,),
    JointType.HIP_LEFT: (LEFT_HIP,),
    JointType.KNEE_LEFT: (LEFT_KNEE,),
    JointType.ANKLE_LEFT: (LEFT_ANKLE,),
    JointType.FOOT_LEFT: (LEFT_FOOT,),
    JointType.HIP_RIGHT: (RIGHT_HIP,),
    JointType.KNEE_RIGHT: (RIGHT_KNEE,),
    JointType.ANKLE_RIGHT: (RIGHT_ANKLE,),
    JointType.FOOT_RIGHT: (RIGHT_FOOT,),
}


class PoseSensor(SensorSource):
    """
    Args:
        camera_index: OpenCV capture index
        model_path: path to a pose_landmarker .task model
        max_bodies: number of people MediaPipe should report
        min_visibility: landmarks below this visibility are NOT_TRACKED
    """

    def __init__(self, camera_index=config.CAMERA_INDEX, model_path=config.POSE_MODEL_PATH,
                 max_bodies=config.MAX_BODIES, min_visibility=0.5):
        if not os.path.isfile(model_path):
            raise FileNotFoundError(f"pose landmarker model not found: {model_path}")

        self.cap = cv2.VideoCapture(camera_index)
        if not self.cap.isOpened():
            raise RuntimeError(f"failed to open camera {camera_index}")

        self.width = int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        self.height = int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        self.mapper = PinholeMapper(self.width, self.width, self.height)  # focal ~ frame width
        self.min_visibility = min_visibility

        base_options = python.BaseOptions(model_asset_path=model_path)
        options = vision.PoseLandmarkerOptions(
            base_options=base_options,
            running_mode=vision.RunningMode.VIDEO,
            num_poses=max_bodies,
        )
        self.detector = vision.PoseLandmarker.create_from_options(options)

        self.start_time = time.monotonic()
        self.last_timestamp = -1
        self.face_tracking_id = None
        self.tracks = {}     # tracking id -> last hip centre in pixels
        self.next_id = 1
        logger.info(f"Camera {camera_index} opened ({self.width}x{self.height})")

    def bind_tracking_id(self, tracking_id):
        self.face_tracking_id = tracking_id
        logger.info(f"Face tracking bound to body {tracking_id}")

    def read(self):
        ret, frame = self.cap.read()
        if not ret:
            return None

        timestamp = int((time.monotonic() - self.start_time) * 1000)
        timestamp = max(timestamp, self.last_timestamp + 1)  # VIDEO mode needs increasing timestamps
        self.last_timestamp = timestamp

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)
        result = self.detector.detect_for_video(mp_image, timestamp)

        bodies = []
        face = None
        poses = result.pose_landmarks or []
        worlds = result.pose_world_landmarks or [None] * len(poses)
        ids = self.assign_ids([self.hip_centre(p) for p in poses])
        for landmarks, world, tracking_id in zip(poses, worlds, ids):
            points, visible = self.landmarks_to_camera(landmarks, world)
            if points is None:
                continue
            bodies.append(Body(tracking_id, self.build_joints(points, visible)))
            if tracking_id == self.face_tracking_id:
                face = self.build_face(points)

        color = cv2.cvtColor(frame, cv2.COLOR_BGR2BGRA)
        return SensorTick(timestamp, bodies, color, face, self.mapper)

    def hip_centre(self, landmarks):
        l, r = landmarks[LEFT_HIP], landmarks[RIGHT_HIP]
        return np.array([(l.x + r.x) / 2 * self.width, (l.y + r.y) / 2 * self.height])

    def assign_ids(self, centres, max_jump=150.0):
        """Greedy nearest-centre matching so a person keeps the same id across frames"""
        free = dict(self.tracks)
        ids = []
        for centre in centres:
            best_id, best_dist = None, max_jump
            for tid, prev in free.items():
                dist = float(np.linalg.norm(centre - prev))
                if dist < best_dist:
                    best_id, best_dist = tid, dist
            if best_id is None:
                best_id = self.next_id
                self.next_id += 1
            else:
                free.pop(best_id)
            ids.append(best_id)
        self.tracks = {tid: centre for tid, centre in zip(ids, centres)}
        return ids

    def estimate_depth(self, landmarks):
        """Body distance from the pixel shoulder width via similar triangles"""
        l, r = landmarks[LEFT_SHOULDER], landmarks[RIGHT_SHOULDER]
        dx = (l.x - r.x) * self.width
        dy = (l.y - r.y) * self.height
        shoulder_px = np.sqrt(dx ** 2 + dy ** 2)
        if shoulder_px < 5:
            return None
        return self.mapper.focal_length * config.REAL_SHOULDER_WIDTH / shoulder_px

    def landmarks_to_camera(self, landmarks, world):
        depth = self.estimate_depth(landmarks)
        if depth is None:
            return None, None
        points = np.zeros((len(landmarks), 3))
        visible = np.zeros(len(landmarks), dtype=bool)
        for i, lm in enumerate(landmarks):
            z = depth + (world[i].z if world is not None else 0.0)
            points[i] = self.mapper.map_color_to_camera(lm.x * self.width, lm.y * self.height, max(z, 0.1))
            visible[i] = getattr(lm, "visibility", 1.0) >= self.min_visibility
        return points, visible

    def build_joints(self, points, visible):
        joints = {}
        for joint_type, indices in JOINT_LANDMARKS.items():
            idx = list(indices)
            state = TrackingState.TRACKED if visible[idx].all() else TrackingState.NOT_TRACKED
            joints[joint_type] = Joint(points[idx].mean(axis=0), state)

        base = joints[JointType.SPINE_BASE]
        top = joints[JointType.SPINE_SHOULDER]
        mouth = points[[MOUTH_LEFT, MOUTH_RIGHT]].mean(axis=0)
        mid_state = min(base.tracking_state, top.tracking_state)
        joints[JointType.SPINE_MID] = Joint((base.position + top.position) / 2, mid_state)
        joints[JointType.NECK] = Joint((top.position + mouth) / 2, top.tracking_state)
        return joints

    def build_face(self, points):
        eyes = points[[LEFT_EYE, RIGHT_EYE]].mean(axis=0)
        mouth = points[[MOUTH_LEFT, MOUTH_RIGHT]].mean(axis=0)
        nose = points[NOSE]
        return {
            SPointType.HEAD_HAIR: eyes + (eyes - mouth) * 1.5,
            SPointType.HEAD_FACE_EYE_LEFT: points[LEFT_EYE],
            SPointType.HEAD_FACE_EYE_RIGHT: points[RIGHT_EYE],
            SPointType.HEAD_FACE_NOSE: nose,
            SPointType.HEAD_FACE_LIP: mouth,
            SPointType.HEAD_FACE_CHEEK_LEFT: (points[LEFT_EAR] + nose) / 2,
            SPointType.HEAD_FACE_CHEEK_RIGHT: (points[RIGHT_EAR] + nose) / 2,
            SPointType.HEAD_FACE_JAW: mouth + (mouth - nose),
        }

    def release(self):
        self.cap.release()
        if self.detector is not None:
            self.detector.close()
            self.detector = None
