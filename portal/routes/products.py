# portal/routes/products.py
from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from portal.db.session import get_database
from portal.logger import get_logger
from portal.schemas.product_dto import ProductDTO, ProductUpdate
from portal.services.catalog_service import CatalogService

logger = get_logger(__name__)

products_bp = Blueprint('products', __name__, url_prefix='/api/products')


@products_bp.route('', methods=['GET'])
def list_products():
    """Part catalog with item type names, ordered by part number."""
    db = get_database().get_session()
    try:
        items = CatalogService(db).list_products()
        return jsonify([ProductDTO.from_orm_model(item).to_wire() for item in items])
    except Exception as e:
        logger.error(f"Error fetching products: {e}")
        return jsonify({'error': 'Failed to fetch products'}), 500
    finally:
        db.close()


@products_bp.route('/<int:item_id>', methods=['GET'])
def get_product(item_id):
    db = get_database().get_session()
    try:
        item = CatalogService(db).get_item(item_id)
        if not item:
            return jsonify({'error': 'Product not found'}), 404
        return jsonify(ProductDTO.from_orm_model(item).to_wire())
    except Exception as e:
        logger.error(f"Error fetching product {item_id}: {e}")
        return jsonify({'error': 'Failed to fetch product'}), 500
    finally:
        db.close()


@products_bp.route('/<int:item_id>', methods=['PUT'])
def update_product(item_id):
    """Manual edit of one catalog row's descriptive fields."""
    try:
        payload = ProductUpdate.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({'error': 'Invalid product payload', 'details': str(e)}), 400

    try:
        with get_database().session_scope() as db:
            catalog = CatalogService(db)
            if not catalog.get_item(item_id):
                return jsonify({'error': 'Product not found'}), 404
            catalog.edit(item_id, payload.model_dump())

        logger.info(f"Product {item_id} updated")
        return jsonify({'success': True})
    except Exception as e:
        logger.error(f"Error updating product {item_id}: {e}")
        return jsonify({'error': 'Failed to update product'}), 500
