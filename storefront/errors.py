class StoreError(Exception):
    pass


class OutOfStock(StoreError):
    def __init__(self, product_name):
        self.product_name = product_name
        super().__init__(f"{product_name} is out of stock")


class InsufficientStock(StoreError):
    def __init__(self, product_name, available):
        self.product_name = product_name
        self.available = available
        super().__init__(f"Only {available} of {product_name} available")
