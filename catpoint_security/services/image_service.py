"""Image analysis adapters answering whether an image contains a cat."""

import os
import random
from typing import Any, List, Optional, Tuple

import cv2
import numpy as np
from PIL import Image

from ..config.defaults import IMAGE_ANALYSIS_SETTINGS
from ..exceptions import ImageAnalysisError
from ..models.config import SecurityConfig
from .interfaces import ImageServiceInterface
from ..logging_config import get_logger

logger = get_logger("image_service")


class FakeImageService(ImageServiceInterface):
    """Stand-in capability returning a random verdict.

    Useful when no camera or model is available. The threshold is ignored.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        verdict = self.rng.random() < 0.5
        logger.debug(f"Fake image analysis verdict: {verdict}")
        return verdict


class OpenCVImageService(ImageServiceInterface):
    """Cat detection backed by an OpenCV Haar cascade."""

    def __init__(self,
                 cascade_path: Optional[str] = None,
                 scale_factor: float = 1.1,
                 min_neighbors: int = 3,
                 min_detection_size: Tuple[int, int] = (30, 30),
                 max_detection_size: Tuple[int, int] = IMAGE_ANALYSIS_SETTINGS["max_detection_size"]):
        self.scale_factor = scale_factor
        self.min_neighbors = min_neighbors
        self.min_detection_size = tuple(min_detection_size)
        self.max_detection_size = tuple(max_detection_size)
        self.cascade_path: Optional[str] = None
        self.cascade = None

        self.load_model(cascade_path)

    @classmethod
    def from_config(cls, config: SecurityConfig) -> "OpenCVImageService":
        return cls(
            cascade_path=config.cascade_path,
            scale_factor=config.scale_factor,
            min_neighbors=config.min_neighbors,
            min_detection_size=config.min_detection_size
        )

    def load_model(self, cascade_path: Optional[str] = None) -> None:
        """Load a cascade file, or the first bundled cat cascade when no path is given."""
        if cascade_path:
            candidates = [cascade_path]
        else:
            candidates = [os.path.join(cv2.data.haarcascades, name)
                          for name in IMAGE_ANALYSIS_SETTINGS["builtin_cascades"]]

        for path in candidates:
            if not os.path.exists(path):
                logger.debug(f"Cascade not found: {path}")
                continue
            cascade = cv2.CascadeClassifier(path)
            if not cascade.empty():
                self.cascade = cascade
                self.cascade_path = path
                logger.info(f"Loaded Haar cascade from {path}")
                return

        raise ImageAnalysisError(f"No usable Haar cascade in {candidates}")

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        if image is None:
            return False

        gray = self._to_grayscale(image)
        scores = [self._score_detection(box, gray.shape) for box in self._detect(gray)]
        best = max(scores, default=0.0)

        logger.debug(f"{len(scores)} cascade hits, best score {best:.1f}% "
                     f"(threshold {confidence_threshold:.1f}%)")
        return best >= confidence_threshold

    def _to_grayscale(self, image: Any) -> np.ndarray:
        if isinstance(image, Image.Image):
            frame = np.asarray(image.convert("RGB"))
        else:
            frame = np.asarray(image)

        if frame.dtype != np.uint8:
            frame = np.clip(frame, 0, 255).astype(np.uint8)

        if frame.ndim == 2:
            return frame
        if frame.ndim == 3 and frame.shape[2] == 4:
            return cv2.cvtColor(frame, cv2.COLOR_RGBA2GRAY)
        if frame.ndim == 3 and frame.shape[2] == 3:
            return cv2.cvtColor(frame, cv2.COLOR_RGB2GRAY)
        raise ImageAnalysisError(f"Unsupported image shape {frame.shape}")

    def _detect(self, gray: np.ndarray) -> List[Tuple[int, int, int, int]]:
        detections = self.cascade.detectMultiScale(
            cv2.equalizeHist(gray),
            scaleFactor=self.scale_factor,
            minNeighbors=self.min_neighbors,
            minSize=self.min_detection_size,
            maxSize=self.max_detection_size
        )
        return [(int(x), int(y), int(w), int(h)) for x, y, w, h in detections]

    def _score_detection(self, box: Tuple[int, int, int, int],
                         frame_shape: Tuple[int, ...]) -> float:
        """Score a cascade hit in percent; central and large boxes score higher."""
        x, y, w, h = box
        frame_h, frame_w = frame_shape[:2]

        center_x = x + w // 2
        center_y = y + h // 2
        center_dist = ((center_x - frame_w // 2) ** 2 + (center_y - frame_h // 2) ** 2) ** 0.5
        max_dist = ((frame_w // 2) ** 2 + (frame_h // 2) ** 2) ** 0.5
        center_factor = 1.0 - (center_dist / max_dist) if max_dist else 0.0

        max_area = self.max_detection_size[0] * self.max_detection_size[1]
        size_factor = min(1.0, (w * h) / max_area)

        score = (IMAGE_ANALYSIS_SETTINGS["base_score"]
                 + IMAGE_ANALYSIS_SETTINGS["center_weight"] * center_factor
                 + IMAGE_ANALYSIS_SETTINGS["size_weight"] * size_factor)
        return max(0.0, min(100.0, score))


def create_image_service(config: SecurityConfig) -> ImageServiceInterface:
    """Build the image analysis capability named in the configuration."""
    if config.image_service == "fake":
        return FakeImageService()
    if config.image_service == "opencv":
        return OpenCVImageService.from_config(config)
    raise ImageAnalysisError(f"Unknown image service: {config.image_service}")
