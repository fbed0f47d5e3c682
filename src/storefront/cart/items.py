"""Cart management — commands and handler."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String

from storefront.cart import cart_for
from storefront.cart.cart import ShoppingCart
from storefront.domain import storefront
from storefront.shared.product import Product


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = String(required=True, max_length=100)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    category = String(max_length=100)
    quantity = Integer(default=1, min_value=1)


@storefront.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    """Set a line's quantity; zero removes the line."""

    user_id = Identifier(required=True)
    product_id = String(required=True, max_length=100)
    quantity = Integer(required=True, min_value=0)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = String(required=True, max_length=100)


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    user_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class ApplyPromotion:
    user_id = Identifier(required=True)
    promotion_code = String(max_length=50)


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = Product(
            product_id=command.product_id,
            name=command.name,
            price=command.price,
            category=command.category,
        )
        cart_for(command.user_id).add_item(product, command.quantity or 1)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        cart_for(command.user_id).update_quantity(command.product_id, command.quantity)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart_for(command.user_id).remove_item(command.product_id)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart_for(command.user_id).clear()

    @handle(ApplyPromotion)
    def apply_promotion(self, command):
        cart_for(command.user_id).apply_promotion(command.promotion_code)
