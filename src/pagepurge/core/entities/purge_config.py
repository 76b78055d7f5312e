"""Purge configuration entity."""

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

DEFAULT_EXCLUDED_TYPES = ("attachment",)

DEFAULT_PUBLIC_STATUSES = ("publish",)

# Profile fields that show up on author archives or author boxes.
DEFAULT_PROFILE_FIELDS = (
    "description",
    "display_name",
    "first_name",
    "last_name",
    "nickname",
    "user_email",  # drives the avatar image
    "user_nicename",  # author archive slug
    "user_url",
)

# Site-wide changes that make selective purging impractical.
DEFAULT_FULL_PURGE_EVENTS = (
    "customize_save_after",
    "save_post_wp_global_styles",
    "save_post_wp_template",
    "save_post_wp_template_part",
    "switch_theme",
    "update_option_blogdescription",
    "update_option_blogname",
    "update_option_date_format",
    "update_option_permalink_structure",
    "update_option_posts_per_page",
    "update_option_sidebars_widgets",
    "update_option_time_format",
    "update_option_timezone_string",
    "upgrader_process_complete",
    "wp_update_nav_menu",
)


@dataclass
class PurgeConfig:
    """Purge engine configuration.

    Supplied once before an epoch begins and treated as immutable for
    the epoch's duration.

    Attributes:
        enabled: Master switch. When False the engine registers nothing.
        debug: Emit debug log records. Error records are always emitted.
        excluded_types: Content types that never trigger purging.
        public_statuses: Statuses under which content is publicly cached.
        profile_fields: Author fields whose change triggers author purging.
        full_purge_events: Events that latch a full cache flush.
        cache_tag_prefix: Cache tag purged alongside the host on full flush.
        posts_item_type: Content type listed on the posts page.
        exclude_private_types: Also exclude the store's non-public types.
    """

    enabled: bool = True
    debug: bool = False
    excluded_types: tuple[str, ...] = DEFAULT_EXCLUDED_TYPES
    public_statuses: tuple[str, ...] = DEFAULT_PUBLIC_STATUSES
    profile_fields: tuple[str, ...] = DEFAULT_PROFILE_FIELDS
    full_purge_events: tuple[str, ...] = DEFAULT_FULL_PURGE_EVENTS
    cache_tag_prefix: str | None = None
    posts_item_type: str = "post"
    exclude_private_types: bool = True

    def __post_init__(self) -> None:
        """Normalize list-valued settings to tuples."""
        self.excluded_types = tuple(self.excluded_types)
        self.public_statuses = tuple(self.public_statuses)
        self.profile_fields = tuple(self.profile_fields)
        self.full_purge_events = tuple(self.full_purge_events)
        if not self.cache_tag_prefix:
            self.cache_tag_prefix = None

    def is_public(self, status: str | None) -> bool:
        """Check whether a status is publicly cached."""
        return status is not None and status in self.public_statuses

    @classmethod
    def from_env(
        cls,
        prefix: str = "PAGEPURGE_",
        environ: Mapping[str, str] | None = None,
    ) -> "PurgeConfig":
        """Build a configuration from environment variables.

        Recognized variables (with the default prefix): PAGEPURGE_ENABLED,
        PAGEPURGE_DEBUG, PAGEPURGE_EXCLUDED_TYPES, PAGEPURGE_PUBLIC_STATUSES,
        PAGEPURGE_PROFILE_FIELDS, PAGEPURGE_FULL_PURGE_EVENTS,
        PAGEPURGE_CACHE_TAG_PREFIX, PAGEPURGE_POSTS_ITEM_TYPE and
        PAGEPURGE_EXCLUDE_PRIVATE_TYPES. Lists are comma-separated.

        Args:
            prefix: Variable name prefix.
            environ: Mapping to read from. Defaults to os.environ.

        Returns:
            A new PurgeConfig. Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        for name in ("enabled", "debug", "exclude_private_types"):
            raw = env.get(f"{prefix}{name.upper()}")
            if raw is not None:
                values[name] = raw.strip().lower() in ("1", "true", "yes", "on")

        for name in (
            "excluded_types",
            "public_statuses",
            "profile_fields",
            "full_purge_events",
        ):
            raw = env.get(f"{prefix}{name.upper()}")
            if raw is not None:
                values[name] = _split_list(raw)

        for name in ("cache_tag_prefix", "posts_item_type"):
            raw = env.get(f"{prefix}{name.upper()}")
            if raw is not None:
                values[name] = raw.strip()

        return cls(**values)  # type: ignore[arg-type]


def _split_list(raw: str) -> tuple[str, ...]:
    items: Iterable[str] = (part.strip() for part in raw.split(","))
    return tuple(item for item in items if item)
