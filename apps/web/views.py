from django.shortcuts import render
from django.views.decorators.http import require_GET


@require_GET
def home(request):
    # Soft navigation (e.g. the payment status page falling back home) swaps only #page-content.
    template = "web/_home.html" if request.htmx else "web/index.html"
    return render(request, template)
