from django.urls import include, path

urlpatterns = [
    path("", include("idextract.urls")),
]
