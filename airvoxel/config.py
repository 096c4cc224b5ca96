"""
Configuration management for the air voxel system.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass, field

from .exceptions import ConfigError
from .types import DuplicatePolicy, OutOfRangePolicy


DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int = 0
    width: int = 1280
    height: int = 720
    fps: int = 30


@dataclass
class MediaPipeConfig:
    """MediaPipe HandLandmarker configuration settings."""
    model_path: str = "hand_landmarker.task"
    num_hands: int = 1
    min_detection_confidence: float = 0.6
    min_tracking_confidence: float = 0.6


@dataclass
class GridConfig:
    """Voxel grid configuration."""
    size: int = 40
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.APPEND
    out_of_range: OutOfRangePolicy = OutOfRangePolicy.CLAMP


@dataclass
class ClassifierConfig:
    """Finger extension ratios (tip-to-joint over joint-to-wrist)."""
    thumb_ratio: float = 0.7
    finger_ratio: float = 0.5


@dataclass
class GateConfig:
    """Debounce intervals in milliseconds."""
    gesture_threshold_ms: float = 1000.0
    voxel_threshold_ms: float = 500.0


@dataclass
class ActionsConfig:
    """Settings for the voxel actions triggered by gestures."""
    burst_size: int = 10
    saturation: int = 70
    lightness: int = 50
    seed: Optional[int] = None


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool = True
    window_name: str = "Air Voxels"


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    grid: GridConfig = field(default_factory=GridConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    gate: GateConfig = field(default_factory=GateConfig)
    actions: ActionsConfig = field(default_factory=ActionsConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def default_config() -> Cfg:
    """Return a configuration with every setting at its default."""
    return Cfg()


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses the packaged config.default.yaml

    Returns:
        Configuration object with all settings
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping: {config_path}")

    return _dict_to_config(data)


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping")
    return section


def _enum(enum_cls, value, key: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ConfigError(f"Invalid {key}: {value!r} (expected one of: {allowed})") from None


def _positive_float(value, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{key} must be a number, got {value!r}")
    value = float(value)
    if not 0 < value < float("inf"):
        raise ConfigError(f"{key} must be a positive finite number, got {value}")
    return value


def _positive_int(value, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    if value <= 0:
        raise ConfigError(f"{key} must be positive, got {value}")
    return value


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object, filling in defaults."""
    defaults = Cfg()

    camera_data = _section(data, 'camera')
    camera = CameraConfig(
        index=camera_data.get('index', defaults.camera.index),
        width=camera_data.get('width', defaults.camera.width),
        height=camera_data.get('height', defaults.camera.height),
        fps=camera_data.get('fps', defaults.camera.fps)
    )

    mp_data = _section(data, 'mediapipe')
    mediapipe = MediaPipeConfig(
        model_path=mp_data.get('model_path', defaults.mediapipe.model_path),
        num_hands=mp_data.get('num_hands', defaults.mediapipe.num_hands),
        min_detection_confidence=mp_data.get(
            'min_detection_confidence', defaults.mediapipe.min_detection_confidence),
        min_tracking_confidence=mp_data.get(
            'min_tracking_confidence', defaults.mediapipe.min_tracking_confidence)
    )
    if mediapipe.num_hands != 1:
        raise ConfigError("Only single-hand tracking is supported (mediapipe.num_hands must be 1)")

    grid_data = _section(data, 'grid')
    grid = GridConfig(
        size=_positive_int(grid_data.get('size', defaults.grid.size), 'grid.size'),
        duplicate_policy=_enum(
            DuplicatePolicy,
            grid_data.get('duplicate_policy', defaults.grid.duplicate_policy.value),
            'grid.duplicate_policy'),
        out_of_range=_enum(
            OutOfRangePolicy,
            grid_data.get('out_of_range', defaults.grid.out_of_range.value),
            'grid.out_of_range')
    )

    classifier_data = _section(data, 'classifier')
    classifier = ClassifierConfig(
        thumb_ratio=_positive_float(
            classifier_data.get('thumb_ratio', defaults.classifier.thumb_ratio),
            'classifier.thumb_ratio'),
        finger_ratio=_positive_float(
            classifier_data.get('finger_ratio', defaults.classifier.finger_ratio),
            'classifier.finger_ratio')
    )

    gate_data = _section(data, 'gate')
    gate = GateConfig(
        gesture_threshold_ms=_positive_float(
            gate_data.get('gesture_threshold_ms', defaults.gate.gesture_threshold_ms),
            'gate.gesture_threshold_ms'),
        voxel_threshold_ms=_positive_float(
            gate_data.get('voxel_threshold_ms', defaults.gate.voxel_threshold_ms),
            'gate.voxel_threshold_ms')
    )

    actions_data = _section(data, 'actions')
    actions = ActionsConfig(
        burst_size=_positive_int(
            actions_data.get('burst_size', defaults.actions.burst_size), 'actions.burst_size'),
        saturation=actions_data.get('saturation', defaults.actions.saturation),
        lightness=actions_data.get('lightness', defaults.actions.lightness),
        seed=actions_data.get('seed', defaults.actions.seed)
    )

    display_data = _section(data, 'display')
    display = DisplayConfig(
        show_landmarks=display_data.get('show_landmarks', defaults.display.show_landmarks),
        window_name=display_data.get('window_name', defaults.display.window_name)
    )

    logging_data = _section(data, 'logging')
    logging_cfg = LoggingConfig(
        level=str(logging_data.get('level', defaults.logging.level)).upper()
    )

    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        grid=grid,
        classifier=classifier,
        gate=gate,
        actions=actions,
        display=display,
        logging=logging_cfg
    )
