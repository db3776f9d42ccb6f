# app/services/product_client.py
import requests

from app.domain.errors import InternalError
from app.domain.schemas import ProductSnapshot
from app.utils.retry import http_retry
from app.utils.settings import PRODUCT_SERVICE_URL
from app.utils.logging import get_logger

logger = get_logger(__name__)


class ProductClient:
    """Katalog produktow (read-only) po HTTP."""

    def __init__(self, base_url: str | None = None, timeout: int = 2):
        self.base_url = (base_url or PRODUCT_SERVICE_URL).rstrip("/")
        self.timeout = timeout

    def find_by_id(self, product_id: str) -> ProductSnapshot | None:
        try:
            return self._fetch_product(product_id)
        except requests.RequestException as e:
            #po wszystkich retry, katalog lezy albo odpowiada bledem
            logger.error(f"Product service unavailable for {product_id}: {e}")
            raise InternalError("Product service unavailable") from e

    @http_retry()
    def _fetch_product(self, product_id: str) -> ProductSnapshot | None:
        url = f"{self.base_url}/products/{product_id}"
        logger.info(f"ProductClient GET {url}")

        resp = requests.get(url, timeout=self.timeout)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return ProductSnapshot.model_validate(resp.json())
