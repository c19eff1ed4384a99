"""Centralized message constants for error messages and log output."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Track construction
    TRACK_NOT_PROVIDED = "Track is not provided"
    UNSUPPORTED_TRACK_SOURCE = "Cannot build a track from {type_name}"

    # Session registry
    SESSION_NOT_FOUND = "No dispatcher registered for guild {guild_id}"

    # Settings
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"
    INVALID_SEARCH_ENGINE = "Search engine prefix must not contain ':'"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Playback
    PLAY_SKIPPED_NOT_REGISTERED = "play() ignored: guild %s has no registered dispatcher"
    PLAY_SKIPPED_NOTHING_QUEUED = "play() ignored: nothing queued for guild %s"
    TRACK_STARTING = "Starting '%s' in guild %s"
    PLAYER_MISSING = "%s ignored: no player bound for guild %s"
    PAUSE_TOGGLED = "Guild %s paused=%s"
    TRACK_REMOVED = "Removed '%s' at position %d in guild %s"
    QUEUE_SHUFFLED = "Shuffled %d tracks in guild %s"
    TRACKS_SKIPPED = "Skipping %d track(s) in guild %s"
    PLAYBACK_STOPPED = "Playback stopped in guild %s"
    LOOP_SET = "Loop mode for guild %s set to %s"
    PREVIOUS_REQUEUED = "Re-queued previous track '%s' in guild %s"

    # Lifecycle
    DISPATCHER_DESTROYED = "Dispatcher destroyed for guild %s (announce=%s)"
    DISPATCHER_ALREADY_DESTROYED = "destroy() ignored: guild %s already torn down"
    DISPATCHER_REGISTERED = "Registered dispatcher for guild %s"
    DISPATCHER_UNREGISTERED = "Unregistered dispatcher for guild %s"
    QUEUE_ADVANCED = "Advancing queue for guild %s (loop=%s, remaining=%d)"

    # Autoplay
    AUTOPLAY_ENABLED = "Autoplay enabled for guild %s"
    AUTOPLAY_DISABLED = "Autoplay disabled for guild %s"
    AUTOPLAY_NO_SEED = "Autoplay enabled for guild %s but nothing to seed from"
    AUTOPLAY_QUERY = "Autoplay resolving '%s' for guild %s"
    AUTOPLAY_NODE_ERROR = "Node reported an error for '%s' in guild %s: %s"
    AUTOPLAY_BAD_RESPONSE = "Autoplay got no usable results for '%s' in guild %s"
    AUTOPLAY_PICKED = "Autoplay queued '%s' for guild %s after %d attempt(s)"
    AUTOPLAY_EXHAUSTED = "Autoplay found no unique track in %d attempts for guild %s"
    AUTOPLAY_STALE = "Discarding autoplay result for destroyed guild %s"

    # Event bus
    EVENT_NO_HANDLERS = "No handlers for %s"
    EVENT_PUBLISHING = "Publishing %s to %d handlers"
    EVENT_HANDLER_FAILED = "Error in handler for %s: %s"
