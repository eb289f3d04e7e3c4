# Generated manually for the snacks app

import uuid
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='SnackRequest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('image_url', models.URLField(blank=True, max_length=500)),
                ('upvotes', models.PositiveIntegerField(default=0)),
                ('downvotes', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('effective_order_month', models.DateField(editable=False)),
                ('owner', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='snack_requests', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'snack_requests',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['created_at'], name='snack_req_created_idx'),
                    models.Index(fields=['effective_order_month', 'created_at'], name='snack_req_month_idx'),
                ],
            },
        ),
    ]
