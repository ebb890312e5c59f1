from . import crud_product as product
from . import crud_category as category
from . import crud_supplier as supplier
from .crud_image import ImageStore, product_images, category_images, supplier_images
