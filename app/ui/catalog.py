# app/ui/catalog.py

import streamlit as st
from services.api import (
    list_products,
    add_product,
    update_product,
    delete_product,
)


def catalog_page():
    st.title("🛒 Product catalog")

    products = list_products()
    if isinstance(products, dict) and products.get("error"):
        st.error(products["error"])
        return

    if not products:
        st.info("No products yet.")

    for product in products:
        render_product(product)


def my_products_page():
    st.title("📦 My products")

    token = st.session_state.get("access_token")
    user_id = st.session_state.get("user_id")

    handle_add_product(token)

    products = list_products()
    if isinstance(products, dict) and products.get("error"):
        st.error(products["error"])
        return

    owned = [p for p in products if p.get("userId") == user_id]
    if not owned:
        st.info("You have not added any products.")
        return

    for product in owned:
        render_product(product)
        handle_edit_product(token, product)


def render_product(product):
    with st.container(border=True):
        cols = st.columns([1, 3])
        if product.get("imageLink"):
            cols[0].image(product["imageLink"], use_container_width=True)
        cols[1].markdown(f"**{product['name']}**  \n{product.get('description') or ''}")
        cols[1].write(f"💲 {product['price']:.2f}")


def handle_add_product(token):
    with st.expander("➕ Add product"):
        with st.form("add_product_form", clear_on_submit=True):
            name = st.text_input("Name")
            image_link = st.text_input("Image link")
            description = st.text_area("Description")
            price = st.number_input("Price", min_value=0.0, step=0.01)
            submitted = st.form_submit_button("Add")

        if submitted:
            if not name:
                st.warning("Name is required.")
                return
            result = add_product(token, name, image_link or None, description or None, price)
            if result.get("error"):
                st.error(f"❌ {result['error']}")
            else:
                st.success(result.get("message", "Product added"))
                st.rerun()


def handle_edit_product(token, product):
    product_id = product["id"]
    with st.expander(f"✏️ Edit {product['name']}"):
        with st.form(f"edit_product_{product_id}"):
            name = st.text_input("Name", value=product["name"])
            image_link = st.text_input("Image link", value=product.get("imageLink") or "")
            description = st.text_area("Description", value=product.get("description") or "")
            price = st.number_input("Price", min_value=0.0, step=0.01, value=float(product["price"]))
            saved = st.form_submit_button("Save")

        if saved:
            result = update_product(
                token,
                product_id,
                name=name,
                imageLink=image_link,
                description=description,
                price=price,
            )
            if result.get("error"):
                st.error(f"❌ {result['error']}")
            else:
                st.success("Saved")
                st.rerun()

        if st.button("🗑️ Delete", key=f"delete_{product_id}"):
            result = delete_product(token, product_id)
            if result.get("error"):
                st.error(f"❌ {result['error']}")
            else:
                st.success(result.get("message", "Deleted"))
                st.rerun()
