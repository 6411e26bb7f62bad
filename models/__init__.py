from models.users import User
from models.restaurants import Restaurant, MenuItem
from models.orders import Order
from models.order_items import OrderItem
from models.payment_methods import PaymentMethod
from models.payments import Payment

__all__ = ["User", "Restaurant", "MenuItem", "Order", "OrderItem", "PaymentMethod", "Payment"]
