"""Domain initialization and configuration.

Single bounded context for the marketplace: orders split per shop at
checkout, the event-sourced shop ledger, seller withdrawals and product
stock. Configuration lives in ``domain.toml`` next to this file.
"""

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
marketplace = Domain(name="marketplace")
