"""
utils.py

Small helpers shared across the spatial modules.

The public helpers:
- `safe_log_exception(msg, exc, **ctx)` : logs exceptions robustly
- `finite_pair(x, y)` : returns a float pair or ``None`` for non-finite input

"""

from typing import Any, Optional, Tuple
import sys
import logging
import numpy as np

logger = logging.getLogger(__name__)


def safe_log_exception(msg: str, exc: Exception, **ctx: Any) -> None:
    """Report a geometry-engine failure without letting it escape.

    Parse, decode and export errors from shapely arrive here with the record
    context (``srid=...`` and the like) as keyword pairs. The traceback goes
    to `logger.error`; if the logging setup itself is broken the message is
    written to `sys.stderr` instead.
    """
    try:
        if ctx:
            ctx_s = ' | '.join(f"{k}={v!r}" for k, v in ctx.items())
            logger.error('%s | %s | %s', msg, exc, ctx_s, exc_info=exc)
        else:
            logger.error('%s | %s', msg, exc, exc_info=exc)
    except Exception:
        try:
            sys.stderr.write(f'spatialview: unlogged engine error: {msg} ({exc})\n')
        except Exception:
            pass


def finite_pair(x: Any, y: Any) -> Optional[Tuple[float, float]]:
    """Return ``(float(x), float(y))`` when both are finite, else ``None``.

    PROJ signals a failed point by returning ``inf`` rather than raising.
    """
    try:
        xf = float(x)
        yf = float(y)
    except (TypeError, ValueError):
        return None
    if not (np.isfinite(xf) and np.isfinite(yf)):
        return None
    return xf, yf
