"""Customer URL configuration.

Routes (all under ``/api/v1/``):

- ``customers/`` GET list, POST create
- ``customers/{id}/`` GET, PUT/PATCH (rename), DELETE
- ``customers/{id}/activate/`` and ``deactivate/``
- ``customers/{id}/{emails|phones|addresses|documents}/`` POST add
- ``customers/{id}/{collection}/remove/`` POST remove
- ``customers/{id}/{emails|phones|addresses}/primary/`` POST set primary
- ``customers/by-document/{number}/`` GET
"""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.customers.views import CustomerViewSet

router = DefaultRouter(trailing_slash=True)
router.register("customers", CustomerViewSet, basename="customer")

urlpatterns = router.urls
