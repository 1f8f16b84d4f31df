"""Orders (pesanan) and the price estimate offered before ordering."""

import logging
import time
from uuid import uuid4

from fastapi import APIRouter, Depends

from api import deps
from api.deps import ApiError, form_or_json, get_config, get_store
from api.schemas import EstimateRequest, EstimateResponse, OrderCreate, OrderStatusUpdate
from property_market.estimator.errors import EstimationError
from property_market.estimator.knn import ZERO_PRICE, estimate_price, has_any_feature
from property_market.storage.documents import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter()

ORDERS = "orders"


@router.post("/estimate", response_model=EstimateResponse, response_model_exclude_none=True)
def estimate(
    request: EstimateRequest = Depends(form_or_json(EstimateRequest)),
    config: dict = Depends(get_config),
):
    """Estimate a price range from the nearest reference properties."""
    query = request.model_dump()
    logger.info(f"Estimate request: {query}")
    if not has_any_feature(query):
        # Kept as HTTP 200 for existing clients
        return EstimateResponse(status="error", estimatedPrice=ZERO_PRICE)

    start_time = time.time()
    try:
        corpus = deps.get_corpus()
        result = estimate_price(corpus, query, k=config["estimator"]["n_neighbors"])
    except EstimationError as e:
        logger.error(f"Estimation error: {e}")
        raise ApiError(500, "Terjadi kesalahan saat menghitung estimasi harga")

    logger.info(f"Estimate: {result.price_range} (latency: {time.time() - start_time:.3f}s)")
    return EstimateResponse(
        status="success",
        estimatedPrice=result.price_range,
        neighborCount=result.neighbor_count,
        maxDistance=result.max_distance,
    )


@router.post("/add", status_code=201)
def add_order(
    order: OrderCreate = Depends(form_or_json(OrderCreate)),
    store: DocumentStore = Depends(get_store),
):
    order_id = str(uuid4())
    store.set(ORDERS, order_id, {"id": order_id, **order.model_dump(), "status": "WAITING"})
    logger.info(f"Added order {order_id}")
    return {"status": "success", "message": "Pesanan berhasil ditambahkan", "id": order_id}


@router.put("/update/{order_id}")
def update_order_status(
    order_id: str,
    update: OrderStatusUpdate = Depends(form_or_json(OrderStatusUpdate)),
    store: DocumentStore = Depends(get_store),
):
    if not store.exists(ORDERS, order_id):
        raise ApiError(404, "Pesanan tidak ditemukan")
    if not update.status:
        raise ApiError(400, "Status tidak diberikan")

    store.update(ORDERS, order_id, {"status": update.status})
    return {"status": "success", "message": "Status pesanan berhasil diperbarui"}


@router.delete("/delete/{order_id}")
def delete_order(order_id: str, store: DocumentStore = Depends(get_store)):
    if not store.delete(ORDERS, order_id):
        raise ApiError(404, "Pesanan tidak ditemukan")
    return {"status": "success", "message": "Pesanan berhasil dihapus"}


@router.get("/view/{order_id}")
def view_order(order_id: str, store: DocumentStore = Depends(get_store)):
    order = store.get(ORDERS, order_id)
    if order is None:
        raise ApiError(404, "Pesanan tidak ditemukan")
    return {"status": "success", "data": order}


@router.get("/view_by_client/{id_pemesan}")
def view_orders_by_client(id_pemesan: str, store: DocumentStore = Depends(get_store)):
    orders = store.where(ORDERS, id_pemesan=id_pemesan)
    if not orders:
        raise ApiError(404, "Pesanan tidak ditemukan")
    return {"status": "success", "data": orders}


@router.get("/view_by_vendor/{id_vendor}")
def view_orders_by_vendor(id_vendor: str, store: DocumentStore = Depends(get_store)):
    orders = store.where(ORDERS, id_vendor=id_vendor)
    if not orders:
        raise ApiError(404, "Pesanan tidak ditemukan untuk ID vendor yang diberikan")
    return {"status": "success", "data": orders}
