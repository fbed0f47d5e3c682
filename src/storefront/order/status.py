"""Order status management — command and handler."""

from protean import handle
from protean.fields import Identifier, String

from storefront.domain import storefront
from storefront.order import get_ledger
from storefront.order.order import Order, OrderStatus


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(choices=OrderStatus, required=True)


@storefront.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        order = get_ledger().update_status(command.order_id, command.status)
        return order.status
