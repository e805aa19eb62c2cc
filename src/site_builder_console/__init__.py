"""Site Builder Console -- scaffold bundles, fields and responsive image styles.

Each command asks for whatever was not given as an option, then writes
configuration entities to the site's config directory.

Public API::

    from site_builder_console import SiteConfig, load_site_config
    from site_builder_console.imaging import plan_derivatives
    from site_builder_console.commands import COMMANDS, CommandContext
"""

from site_builder_console.config import SiteConfig, load_site_config

__all__ = ["SiteConfig", "load_site_config"]
__version__ = "0.1.0"
