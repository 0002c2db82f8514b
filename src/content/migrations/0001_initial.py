import django.db.models.deletion
from django.db import migrations, models


def _content_fields():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("title", models.CharField(max_length=150)),
        ("excerpt", models.CharField(blank=True, max_length=300)),
        ("body", models.TextField(blank=True)),
        (
            "language",
            models.CharField(choices=[("ar", "Arabic"), ("en", "English")], default="ar", max_length=2),
        ),
        (
            "status",
            models.CharField(
                choices=[("draft", "Draft"), ("published", "Published")],
                default="draft",
                max_length=16,
            ),
        ),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
        (
            "owner",
            models.ForeignKey(
                null=True,
                on_delete=django.db.models.deletion.PROTECT,
                to="authentication.user",
            ),
        ),
    ]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("authentication", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Article",
            fields=_content_fields() + [("premium", models.BooleanField(default=False))],
            options={
                "ordering": ["-created_at"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="News",
            fields=_content_fields(),
            options={
                "verbose_name_plural": "news",
                "ordering": ["-created_at"],
                "abstract": False,
            },
        ),
    ]
