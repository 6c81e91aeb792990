from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('bookings', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='booking',
            name='previous_order_ids',
            field=models.JSONField(blank=True, default=list),
        ),
    ]
