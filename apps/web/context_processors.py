from django.conf import settings


def project_meta(request):
    return {
        "project_meta": {
            "NAME": settings.PROJECT_METADATA.get("NAME", ""),
            "URL": settings.PROJECT_METADATA.get("URL", ""),
            "DESCRIPTION": settings.PROJECT_METADATA.get("DESCRIPTION", ""),
        },
        "cart_url": settings.PAYMENTS.get("CART_URL", "/cart/"),
    }
