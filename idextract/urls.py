from django.urls import path

from . import views

app_name = "idextract"

urlpatterns = [
    path("upload", views.upload, name="upload"),
]
