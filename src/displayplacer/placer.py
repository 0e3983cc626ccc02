"""Apply parsed screen configurations through a display backend.

Each screen goes through: online check, rotation, mirroring, resolution,
origin.  A failing step is logged and recorded, and the run carries on with
the next step and the next screen.  The configuration transaction is
committed once at the end regardless of earlier failures.
"""

from __future__ import annotations

import logging

from .backend import DisplayBackend, DisplayError, DisplayTransaction
from .models import ScreenConfig
from .modes import describe_request, resolve_mode

log = logging.getLogger(__name__)


def validate_online(online: list[int], screen_id: int) -> bool:
    if screen_id in online:
        return True
    log.error("Unable to find screen %s - skipping changes for that screen", screen_id)
    return False


def rotate_screen(backend: DisplayBackend, screen_id: int, degree: int) -> bool:
    """Rotate *screen_id* to *degree* unless it is already there."""
    if backend.rotation(screen_id) == degree:
        return True
    try:
        backend.rotate(screen_id, degree)
    except DisplayError as e:
        log.error("Error rotating screen %s", screen_id)
        log.debug("Rotation failure: %s (code %s)", e, e.code)
        return False
    log.debug("Rotated screen %s to %s degrees", screen_id, degree)
    return True


def configure_mirror(transaction: DisplayTransaction, primary_id: int, mirror_id: int) -> bool:
    try:
        transaction.set_mirror(mirror_id, primary_id)
    except DisplayError as e:
        log.error(
            "Error making the secondary screen %s mirror the primary screen %s",
            mirror_id, primary_id,
        )
        log.debug("Mirror failure: %s (code %s)", e, e.code)
        return False
    log.debug("Screen %s mirrors screen %s", mirror_id, primary_id)
    return True


def configure_mirrors(
    backend: DisplayBackend,
    transaction: DisplayTransaction,
    online: list[int],
    config: ScreenConfig,
) -> bool:
    """Align each mirror's rotation with the primary, then mirror it."""
    ok = True
    for mirror_id in config.mirrors:
        if not validate_online(online, mirror_id):
            ok = False
            continue
        ok = rotate_screen(backend, mirror_id, config.degree) and ok
        ok = configure_mirror(transaction, config.id, mirror_id) and ok
    return ok


def configure_resolution(
    backend: DisplayBackend,
    transaction: DisplayTransaction,
    config: ScreenConfig,
) -> bool:
    try:
        modes = [] if config.has_mode else backend.modes(config.id)
    except DisplayError as e:
        log.error("Screen ID %s: unable to read display modes", config.id)
        log.debug("Mode list failure: %s (code %s)", e, e.code)
        return False

    mode = resolve_mode(config, modes)
    if mode is None:
        log.error("Screen ID %s: could not find %s", config.id, describe_request(config))
        return False
    try:
        transaction.set_mode(config.id, mode)
    except DisplayError as e:
        log.error("Screen ID %s: could not set mode %s", config.id, mode)
        log.debug("Mode failure: %s (code %s)", e, e.code)
        return False
    log.debug("Screen %s set to mode %s", config.id, mode)
    return True


def configure_origin(transaction: DisplayTransaction, config: ScreenConfig) -> bool:
    try:
        transaction.set_origin(config.id, config.x, config.y)
    except DisplayError as e:
        log.error("Error moving screen %s to %sx%s", config.id, config.x, config.y)
        log.debug("Origin failure: %s (code %s)", e, e.code)
        return False
    log.debug("Screen %s moved to (%s,%s)", config.id, config.x, config.y)
    return True


def apply_screen(
    backend: DisplayBackend,
    transaction: DisplayTransaction,
    online: list[int],
    config: ScreenConfig,
) -> bool:
    """Run every step for one screen.  Returns False if any step failed."""
    if config.invalid:
        log.error(
            "Screen ID %s: invalid %s - skipping changes for that screen",
            config.id, " ".join(config.invalid.values()),
        )
        return False
    if not validate_online(online, config.id):
        return False

    ok = rotate_screen(backend, config.id, config.degree)
    ok = configure_mirrors(backend, transaction, online, config) and ok
    ok = configure_resolution(backend, transaction, config) and ok
    ok = configure_origin(transaction, config) and ok
    return ok


def finish(transaction: DisplayTransaction) -> bool:
    """Commit *transaction*, logging a failure instead of raising."""
    try:
        transaction.commit()
    except DisplayError as e:
        log.error("Error finalizing display configurations")
        log.debug("Commit failure: %s (code %s)", e, e.code)
        return False
    return True


def apply_configs(backend: DisplayBackend, configs: list[ScreenConfig]) -> bool:
    """Apply *configs* in order inside one transaction.  True on full success."""
    online = backend.online_screens()
    transaction = backend.begin_configuration()

    ok = True
    try:
        for config in configs:
            log.debug("Configuring screen %s", config.id)
            ok = apply_screen(backend, transaction, online, config) and ok
    finally:
        ok = finish(transaction) and ok
    return ok
