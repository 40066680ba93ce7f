"""In-memory reference directory for development and testing."""

from reviews.directory.port import ProductRef, ReferenceDirectory, UserRef


class FakeDirectory(ReferenceDirectory):
    """Directory backed by dictionaries that tests and dev tooling populate."""

    def __init__(self) -> None:
        self.products: dict[str, ProductRef] = {}
        self.users: dict[str, UserRef] = {}
        self.calls: list[dict] = []

    def add_product(self, product_id: str, name: str | None = None) -> ProductRef:
        ref = ProductRef(product_id=str(product_id), name=name)
        self.products[ref.product_id] = ref
        return ref

    def add_user(self, user_id: str, display_name: str | None = None) -> UserRef:
        ref = UserRef(user_id=str(user_id), display_name=display_name)
        self.users[ref.user_id] = ref
        return ref

    def find_product(self, product_id: str) -> ProductRef | None:
        self.calls.append({"method": "find_product", "product_id": str(product_id)})
        return self.products.get(str(product_id))

    def find_user(self, user_id: str) -> UserRef | None:
        self.calls.append({"method": "find_user", "user_id": str(user_id)})
        return self.users.get(str(user_id))
