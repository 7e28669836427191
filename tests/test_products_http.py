"""HTTP tests for the product pages.

Covers the full request path: identity header, authorization, validation,
persistence and the rendered views or redirects.
"""

from decimal import Decimal

from src.catalog.core.security import decode_flash
from src.catalog.runtime.context import get_config


def flash_from(response):
    return decode_flash(response.cookies.get(get_config().security.flash_cookie_name))


class TestProductListing:
    """GET /products"""

    def test_user_can_access_products_page_after_auth(self, client, user, headers_for):
        response = client.get("/products", headers=headers_for(user))

        assert response.status_code == 200
        assert "Products" in response.text
        assert user.first_name in response.text
        assert user.last_name in response.text

    def test_unauthenticated_request_is_rejected(self, client):
        response = client.get("/products")

        assert response.status_code == 401

    def test_unknown_user_is_rejected(self, client):
        response = client.get("/products", headers={"X-User-ID": "nobody"})

        assert response.status_code == 401

    def test_products_page_does_not_contain_products(self, client, user, headers_for):
        response = client.get("/products", headers=headers_for(user))

        assert response.status_code == 200
        assert "No products found" in response.text
        assert response.context["products"] == []

    def test_products_page_contains_products(
        self, client, user, headers_for, product_repository
    ):
        product = product_repository.create({"name": "Product test", "price": "19.99"})

        response = client.get("/products", headers=headers_for(user))

        assert response.status_code == 200
        assert "No products found" not in response.text
        assert product in response.context["products"]

    def test_products_page_does_not_contain_the_6th_record(
        self, client, user, headers_for, product_factory
    ):
        products = product_factory(6)
        last_product = products[-1]

        response = client.get("/products", headers=headers_for(user))

        assert response.status_code == 200
        assert "No products found" not in response.text
        assert len(response.context["products"]) == 5
        assert last_product not in response.context["products"]

    def test_second_page_contains_the_6th_record(
        self, client, user, headers_for, product_factory
    ):
        products = product_factory(6)

        response = client.get("/products?page=2", headers=headers_for(user))

        assert response.status_code == 200
        assert response.context["products"] == [products[-1]]
        assert response.context["pagination"].total_pages == 2

    def test_admin_sees_management_links(self, client, admin, headers_for, product_factory):
        product_factory(1)

        response = client.get("/products", headers=headers_for(admin))

        assert "Add new product" in response.text
        assert "Edit" in response.text


class TestCreateProduct:
    """GET /products/create and POST /products"""

    def test_user_can_not_access_create_product_page(self, client, user, headers_for):
        response = client.get("/products/create", headers=headers_for(user))

        assert response.status_code == 403

    def test_admin_can_access_create_product_page(self, client, admin, headers_for):
        response = client.get("/products/create", headers=headers_for(admin))

        assert response.status_code == 200
        assert "Add product" in response.text

    def test_product_save_has_failed_and_redirect_back(
        self, client, admin, headers_for, product_repository
    ):
        response = client.post(
            "/products",
            data={"name": "Pr", "price": ""},
            headers=headers_for(admin),
            follow_redirects=False,
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/products/create"
        flash = flash_from(response)
        assert set(flash.errors) == {"name", "price"}
        assert flash.old("name") == "Pr"
        assert product_repository.count() == 0

    def test_failed_save_redirects_to_referer_and_shows_errors(
        self, client, admin, headers_for
    ):
        headers = {**headers_for(admin), "Referer": "http://testserver/products/create"}

        response = client.post("/products", data={"name": "Pr", "price": ""}, headers=headers)

        assert response.status_code == 200
        assert "The name field must be at least 3 characters." in response.text
        assert "The price field is required." in response.text
        assert 'value="Pr"' in response.text

    def test_foreign_referer_is_not_followed(self, client, admin, headers_for):
        headers = {**headers_for(admin), "Referer": "https://evil.example/phish"}

        response = client.post(
            "/products",
            data={"name": "Pr", "price": ""},
            headers=headers,
            follow_redirects=False,
        )

        assert response.headers["location"] == "/products/create"

    def test_product_saved_successfully(
        self, client, admin, headers_for, product_repository
    ):
        response = client.post(
            "/products",
            data={"name": "Product test", "price": "19.99"},
            headers=headers_for(admin),
            follow_redirects=False,
        )

        assert response.status_code == 302
        last_product = product_repository.list(order="desc").items[0]
        assert response.headers["location"] == f"/products/show/{last_product.id}"
        assert last_product.name == "Product test"
        assert last_product.price == Decimal("19.99")

    def test_product_saved_from_json_body(
        self, client, admin, headers_for, product_repository
    ):
        response = client.post(
            "/products",
            json={"name": "Product test", "price": 19.99},
            headers=headers_for(admin),
            follow_redirects=False,
        )

        assert response.status_code == 302
        assert product_repository.count() == 1
        assert product_repository.list().items[0].price == Decimal("19.99")

    def test_user_can_not_store_product(self, client, user, headers_for, product_repository):
        response = client.post(
            "/products",
            data={"name": "Product test", "price": "19.99"},
            headers=headers_for(user),
            follow_redirects=False,
        )

        assert response.status_code == 403
        assert product_repository.count() == 0

    def test_user_with_invalid_data_is_still_forbidden(self, client, user, headers_for):
        response = client.post(
            "/products",
            data={"name": "Pr", "price": ""},
            headers=headers_for(user),
            follow_redirects=False,
        )

        assert response.status_code == 403
        assert get_config().security.flash_cookie_name not in response.cookies

    def test_malformed_json_from_non_admin_is_forbidden(
        self, client, user, headers_for, product_repository
    ):
        response = client.post(
            "/products",
            content=b"{bad",
            headers={**headers_for(user), "Content-Type": "application/json"},
            follow_redirects=False,
        )

        assert response.status_code == 403
        assert product_repository.count() == 0

    def test_malformed_json_without_identity_is_unauthenticated(self, client):
        response = client.post(
            "/products",
            content=b"{bad",
            headers={"Content-Type": "application/json"},
            follow_redirects=False,
        )

        assert response.status_code == 401

    def test_malformed_json_from_admin_is_a_bad_request(
        self, client, admin, headers_for, product_repository
    ):
        response = client.post(
            "/products",
            content=b"{bad",
            headers={**headers_for(admin), "Content-Type": "application/json"},
            follow_redirects=False,
        )

        assert response.status_code == 400
        assert product_repository.count() == 0

    def test_json_float_price_is_stored_in_cents(
        self, client, admin, headers_for, product_repository
    ):
        response = client.post(
            "/products",
            json={"name": "Product test", "price": 0.1 + 0.2},
            headers=headers_for(admin),
            follow_redirects=False,
        )

        assert response.status_code == 302
        assert product_repository.list().items[0].price == Decimal("0.30")

    def test_saved_product_is_shown(self, client, admin, headers_for):
        response = client.post(
            "/products",
            data={"name": "Product test", "price": "19.99"},
            headers=headers_for(admin),
        )

        assert response.status_code == 200
        assert response.template.name == "products/show.html"
        assert "Product test" in response.text


class TestEditProduct:
    """GET /products/{id}/edit and PUT /products/{id}"""

    def test_user_can_not_access_edit_product_page(
        self, client, user, headers_for, product_factory
    ):
        (product,) = product_factory(1)

        response = client.get(f"/products/{product.id}/edit", headers=headers_for(user))

        assert response.status_code == 403

    def test_admin_can_access_edit_product_page(
        self, client, admin, headers_for, product_factory
    ):
        (product,) = product_factory(1)

        response = client.get(f"/products/{product.id}/edit", headers=headers_for(admin))

        assert response.status_code == 200
        assert "Update product informations" in response.text

    def test_product_edit_form_has_correct_values(
        self, client, admin, headers_for, product_factory
    ):
        (product,) = product_factory(1)

        response = client.get(f"/products/{product.id}/edit", headers=headers_for(admin))

        assert response.status_code == 200
        assert f'value="{product.name}"' in response.text
        assert f'value="{product.price}"' in response.text
        assert response.context["product"] == product

    def test_edit_missing_product_returns_404(self, client, admin, headers_for):
        response = client.get("/products/999/edit", headers=headers_for(admin))

        assert response.status_code == 404

    def test_product_update_has_failed_and_redirect_back(
        self, client, admin, headers_for, product_factory, product_repository
    ):
        (product,) = product_factory(1)

        response = client.put(
            f"/products/{product.id}",
            data={"name": "Pr", "price": ""},
            headers=headers_for(admin),
            follow_redirects=False,
        )

        assert response.status_code == 302
        assert response.headers["location"] == f"/products/{product.id}/edit"
        assert set(flash_from(response).errors) == {"name", "price"}
        assert product_repository.get(product.id) == product

    def test_product_updated_successfully(
        self, client, admin, headers_for, product_factory, product_repository
    ):
        (product,) = product_factory(1)

        response = client.put(
            f"/products/{product.id}",
            data={"name": "Product test edited", "price": "24.99"},
            headers=headers_for(admin),
            follow_redirects=False,
        )

        assert response.status_code == 302
        assert response.headers["location"] == f"/products/show/{product.id}"
        updated = product_repository.get(product.id)
        assert updated.name == "Product test edited"
        assert updated.price == Decimal("24.99")

    def test_user_can_not_update_product(
        self, client, user, headers_for, product_factory, product_repository
    ):
        (product,) = product_factory(1)

        response = client.put(
            f"/products/{product.id}",
            data={"name": "Product test edited", "price": "24.99"},
            headers=headers_for(user),
            follow_redirects=False,
        )

        assert response.status_code == 403
        assert product_repository.get(product.id) == product

    def test_update_missing_product_returns_404(self, client, admin, headers_for):
        response = client.put(
            "/products/999",
            data={"name": "Product test edited", "price": "24.99"},
            headers=headers_for(admin),
            follow_redirects=False,
        )

        assert response.status_code == 404

    def test_malformed_json_update_from_non_admin_is_forbidden(
        self, client, user, headers_for, product_factory, product_repository
    ):
        (product,) = product_factory(1)

        response = client.put(
            f"/products/{product.id}",
            content=b"{bad",
            headers={**headers_for(user), "Content-Type": "application/json"},
            follow_redirects=False,
        )

        assert response.status_code == 403
        assert product_repository.get(product.id) == product

    def test_html_form_update_uses_method_field(
        self, client, admin, headers_for, product_factory, product_repository
    ):
        (product,) = product_factory(1)

        response = client.post(
            f"/products/{product.id}",
            data={"_method": "PUT", "name": "Spoofed update", "price": "5"},
            headers=headers_for(admin),
            follow_redirects=False,
        )

        assert response.status_code == 302
        assert product_repository.get(product.id).name == "Spoofed update"

    def test_post_without_method_field_is_not_allowed(
        self, client, admin, headers_for, product_factory
    ):
        (product,) = product_factory(1)

        response = client.post(
            f"/products/{product.id}",
            data={"name": "Nope", "price": "5"},
            headers=headers_for(admin),
            follow_redirects=False,
        )

        assert response.status_code == 405


class TestDeleteProduct:
    """DELETE /products/{id}"""

    def test_user_can_not_delete_product(
        self, client, user, headers_for, product_factory, product_repository
    ):
        (product,) = product_factory(1)

        response = client.delete(f"/products/{product.id}", headers=headers_for(user))

        assert response.status_code == 403
        assert product_repository.count() == 1

    def test_admin_can_delete_product(
        self, client, admin, headers_for, product_factory, product_repository
    ):
        first, _second = product_factory(2)

        response = client.delete(
            f"/products/{first.id}", headers=headers_for(admin), follow_redirects=False
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/products"
        assert product_repository.get(first.id) is None
        assert product_repository.count() == 1

    def test_delete_missing_product_returns_404(self, client, admin, headers_for):
        response = client.delete("/products/999", headers=headers_for(admin))

        assert response.status_code == 404

    def test_html_form_delete_uses_method_field(
        self, client, admin, headers_for, product_factory, product_repository
    ):
        (product,) = product_factory(1)

        response = client.post(
            f"/products/{product.id}",
            data={"_method": "DELETE"},
            headers=headers_for(admin),
            follow_redirects=False,
        )

        assert response.status_code == 302
        assert product_repository.count() == 0


class TestProductIdentifiers:
    """Ids that are not integers are simply unknown products."""

    def test_non_integer_id_on_edit_is_not_found(self, client, admin, headers_for):
        response = client.get("/products/abc/edit", headers=headers_for(admin))

        assert response.status_code == 404

    def test_non_integer_id_on_show_is_not_found(self, client, user, headers_for):
        response = client.get("/products/show/abc", headers=headers_for(user))

        assert response.status_code == 404

    def test_non_integer_id_on_update_is_not_found(self, client, admin, headers_for):
        response = client.put(
            "/products/abc",
            data={"name": "Product test", "price": "1"},
            headers=headers_for(admin),
            follow_redirects=False,
        )

        assert response.status_code == 404

    def test_non_integer_id_on_delete_is_not_found(self, client, admin, headers_for):
        response = client.delete("/products/abc", headers=headers_for(admin))

        assert response.status_code == 404


class TestApplicationEndpoints:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "ok"

    def test_root_redirects_to_products(self, client):
        response = client.get("/", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/products"

    def test_responses_carry_request_id(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"
