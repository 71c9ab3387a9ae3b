"""Join raw cart lines with catalog products to build displayable cart entries."""

import logging
from typing import Iterable, List, Sequence

from storefront.integrations.contracts.interfaces import CartEntry, Product, RawCartLine, product_index

logger = logging.getLogger(__name__)


def reconcile(raw_lines: Iterable[RawCartLine], catalog: Sequence[Product]) -> List[CartEntry]:
    """Return one CartEntry per raw line, in raw-line order.

    Lines whose product id is not in ``catalog`` are dropped and logged, so
    every returned entry refers to a product of the snapshot it was built
    from.
    """
    index = product_index(catalog)
    entries: List[CartEntry] = []
    for line in raw_lines:
        product = index.get(line.product_id)
        if product is None:
            logger.warning(
                "Dropping cart line that references unknown product: product_id=%s qty=%s",
                line.product_id,
                line.qty,
            )
            continue
        entries.append(CartEntry.from_product(product, line.qty))
    return entries
