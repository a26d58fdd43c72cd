# app/services/api.py

import os
import requests

# Base URL of the FastAPI backend
FASTAPI_URL = os.getenv("CATALOG_API_URL", "http://localhost:8000")
TIMEOUT = 10


def _auth_headers(access_token):
    return {"Authorization": f"Bearer {access_token}"}


def _parse(res):
    """
    Returns the decoded body on success, or a dict with an `error` key.
    """
    try:
        data = res.json()
    except ValueError:
        data = None

    if res.ok:
        return data
    if isinstance(data, dict) and data.get("error"):
        return {"error": data["error"], "status": res.status_code}
    return {"error": f"Status {res.status_code}", "status": res.status_code}


def _request(method, path, **kwargs):
    try:
        res = requests.request(method, f"{FASTAPI_URL}{path}", timeout=TIMEOUT, **kwargs)
    except requests.RequestException as e:
        return {"error": str(e)}
    return _parse(res)


# -------------------------------
# Authentication-related functions
# -------------------------------

def signup_user(username, password):
    return _request("POST", "/auth/signup", json={"username": username, "password": password})


def login_user(username, password):
    """
    Logs in a user and returns {"token": ...} or {"error": ...}.
    """
    return _request("POST", "/auth/login", json={"username": username, "password": password})


def logout_user():
    return _request("POST", "/auth/logout")


# -------------------------
# Products
# -------------------------

def list_products():
    data = _request("GET", "/auth/products")
    if isinstance(data, list):
        return data
    return data if isinstance(data, dict) else []


def get_product(product_id):
    return _request("GET", f"/auth/products/{product_id}")


def add_product(access_token, name, image_link, description, price):
    payload = {
        "productName": name,
        "imageLink": image_link,
        "description": description,
        "price": price,
    }
    return _request("POST", "/auth/addProduct", json=payload, headers=_auth_headers(access_token))


def update_product(access_token, product_id, **fields):
    """
    Sends only the given fields (name, imageLink, description, price).
    """
    return _request(
        "PUT",
        f"/auth/products/{product_id}",
        json=fields,
        headers=_auth_headers(access_token),
    )


def delete_product(access_token, product_id):
    return _request(
        "DELETE",
        f"/auth/deleteProduct/{product_id}",
        headers=_auth_headers(access_token),
    )
