"""Product value object — the catalogue's view of a sellable item.

Products are owned by the catalogue; the storefront only reads them and
copies what it needs into cart and order line items. Stock is informational
here: availability checks belong to the presentation layer.
"""

from protean.fields import Boolean, Float, Integer, String

from storefront.domain import storefront


@storefront.value_object
class Product:
    product_id = String(required=True, max_length=100)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    category = String(max_length=100)
    stock = Integer(default=0, min_value=0)
    in_stock = Boolean(default=True)
