"""Gold-price driven ring pricing.

Spot price lookup, price/rating arithmetic, range filters and the
pipeline that ties them to the static catalog.
"""

from ringcatalog.pricing.filters import apply_filters, parse_filters
from ringcatalog.pricing.oracle import PriceOracle
from ringcatalog.pricing.pipeline import PricingPipeline

__all__ = ["PriceOracle", "PricingPipeline", "apply_filters", "parse_filters"]
