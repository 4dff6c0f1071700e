"""
Storefront errors.

Centralized error messages (shown to shoppers in Arabic) and the
exception types raised by the cart, checkout and pricing services.
"""

# Cart
ERROR_CART_EMPTY = "السلة فارغة، أضف منتجات أولاً"
ERROR_LINE_ITEM_NOT_FOUND = "Cart item not found"

# Catalog
ERROR_SERVICE_NOT_FOUND = "Product not found"

# Orders
ERROR_ORDER_NOT_FOUND = "Order not found"
ERROR_ORDER_FAILED = "حدث خطأ أثناء إرسال الطلب. يرجى المحاولة مرة أخرى."

# Checkout form fields
ERROR_NAME_INVALID = "الرجاء إدخال الاسم الكامل"
ERROR_PHONE_INVALID = "رقم الهاتف غير صحيح"
ERROR_ADDRESS_INVALID = "الرجاء إدخال عنوان تفصيلي"
ERROR_NOTES_TOO_LONG = "الملاحظات طويلة جداً"
ERROR_PAYMENT_METHOD_INVALID = "طريقة الدفع غير مدعومة"

# Assistant
ERROR_ASSISTANT_UNCLEAR = "عذراً، لم أتمكن من فهم سؤالك. يرجى المحاولة مرة أخرى."
ERROR_ASSISTANT_UNAVAILABLE = "⚠️ حدث خطأ تقني. يمكنك التواصل معنا مباشرة عبر الواتساب: {phone}"

# Generic
ERROR_INVALID_REQUEST = "Invalid request"


class StorefrontError(Exception):
    """Base class for storefront errors."""


class PriceParseError(StorefrontError, ValueError):
    """Raised by strict price parsing when no number can be extracted."""


class EmptyCartError(StorefrontError):
    """Raised when an operation needs at least one line item."""

    def __init__(self, message: str = ERROR_CART_EMPTY):
        super().__init__(message)
        self.message = message


class CheckoutValidationError(StorefrontError):
    """Checkout form failed validation. `errors` maps field -> message."""

    def __init__(self, errors: dict[str, str]):
        super().__init__(", ".join(sorted(errors)))
        self.errors = errors


class OrderSubmissionError(StorefrontError):
    """The backend rejected or failed to store an order."""

    def __init__(self, message: str = ERROR_ORDER_FAILED):
        super().__init__(message)
        self.message = message
