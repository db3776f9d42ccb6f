# product_service/main.py
from fastapi import FastAPI, HTTPException

app = FastAPI(title="Product Service (dev mock)")


PRODUCTS = {
    "5f71c1ca04c69a5874e9fd45": {
        "id": "5f71c1ca04c69a5874e9fd45",
        "name": "ReactJS Frontend Development Book",
        "category": "Books",
        "cost": 24,
        "rating": 4,
    },
    "BW0jAAeDJmlZCF8i": {
        "id": "BW0jAAeDJmlZCF8i",
        "name": "Sonoma Analog Wall Clock",
        "category": "Home & Kitchen",
        "cost": 42,
        "rating": 4,
    },
    "KCRwjF7lN97HnEaY": {
        "id": "KCRwjF7lN97HnEaY",
        "name": "Nike Running Shoes",
        "category": "Fashion",
        "cost": 120,
        "rating": 5,
    },
}


@app.get("/products")
def list_products():
    return list(PRODUCTS.values())


@app.get("/products/{product_id}")
def get_product(product_id: str):
    product = PRODUCTS.get(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
