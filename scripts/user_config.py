"""oifits User Configuration.

This is the user-facing configuration file. Modify settings here to customize
logging and cross-reference resolution. Expert defaults are in
src/oifits/settings/param.py

Usage:
    from oifits.settings import init_config
    config = init_config("scripts/user_config.py")
    master = OIMaster(config=config)
"""

CONFIG = {
    # ========================================================================
    # LOGGING
    # ========================================================================
    "LOG_LEVEL": "INFO",          # DEBUG, INFO, WARNING, ERROR, CRITICAL
    "LOG_FILE": None,             # e.g. "logs/oifits.log"

    # ========================================================================
    # LINK RESOLUTION
    # ========================================================================
    # What to do when a data-block names an OI_ARRAY or OI_CORR that is not
    # in the master: "error", "warn" or "ignore".
    "MISSING_ARRAY": "warn",
    "MISSING_CORRELATION": "warn",

    # ========================================================================
    # LAYOUT REGISTRY
    # ========================================================================
    "BUILTIN_FORMATS": True,      # Install the OI-FITS 1 and 2 layouts
    "FREEZE_REGISTRY": True,      # Reject later registrations
}
