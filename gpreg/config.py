# gpreg/config.py
import os
import logging

# Read version from VERSION file
_version_file = os.path.join(os.path.dirname(__file__), "..", "VERSION")
try:
    with open(os.path.abspath(_version_file), "r") as f:
        __version__ = f.read().strip()
except FileNotFoundError:
    __version__ = "0.0.0"

_SUPPORTED_BACKENDS = ("numpy",)


class _GPRegConfig:
    def __init__(self):
        self.version = __version__
        self.backend = None
        self.dtype = float
        self.default_noise = 1e-7
        self.iterations = 100
        self.learning_rate = 0.01
        # relative drop of the log-likelihood tolerated between two ascent steps
        self.decrease_tolerance = 1e-6
        # logger lives in config
        self.logger = logging.getLogger("gpreg")
        if not self.logger.handlers:
            h = logging.StreamHandler()
            h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            self.logger.addHandler(h)
        self.logger.setLevel(logging.WARNING)

    def __str__(self):
        return (
            f"GPRegConfig("
            f"version={self.version}, "
            f"backend={self.backend}, "
            f"dtype={self.dtype}, "
            f"default_noise={self.default_noise}, "
            f"iterations={self.iterations}, "
            f"learning_rate={self.learning_rate}, "
            f"decrease_tolerance={self.decrease_tolerance})"
        )

    def __repr__(self):
        return (
            f"<GPRegConfig "
            f"version={self.version!r}, "
            f"backend={self.backend!r}, "
            f"dtype={self.dtype!r}, "
            f"default_noise={self.default_noise!r}, "
            f"iterations={self.iterations!r}, "
            f"learning_rate={self.learning_rate!r}, "
            f"decrease_tolerance={self.decrease_tolerance!r}>"
        )

    def update(self, **kwargs):
        for k, v in kwargs.items():
            if not hasattr(self, k):
                raise AttributeError(f"unknown configuration entry '{k}'")
            setattr(self, k, v)
        return self


_config = _GPRegConfig()


def get_config():
    return _config


def _detect_backend():
    env = os.environ.get("GPREG_BACKEND")
    if env is None:
        return "numpy"
    if env not in _SUPPORTED_BACKENDS:
        raise ValueError(
            f"GPREG_BACKEND={env!r} is not supported; use one of {_SUPPORTED_BACKENDS}"
        )
    return env


def init_backend():
    """Idempotent. Detect and store backend, set env for downstream imports."""
    if _config.backend is None:
        backend = _detect_backend()
        _config.backend = backend
        os.environ["GPREG_BACKEND"] = backend
    return _config.backend


def get_backend():
    """Return current backend; triggers detection if not set."""
    return _config.backend or init_backend()


def get_logger():
    return _config.logger


def set_log_level(level):
    _config.logger.setLevel(level)
