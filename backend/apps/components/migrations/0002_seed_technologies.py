"""
Seed the technologies offered on the create form.
"""
from django.db import migrations

DEFAULT_TECHNOLOGIES = ['react', 'tailwind', 'typescript']


def seed_technologies(apps, schema_editor):
    Technology = apps.get_model('components', 'Technology')
    for name in DEFAULT_TECHNOLOGIES:
        Technology.objects.get_or_create(name=name)


def reverse_seed(apps, schema_editor):
    Technology = apps.get_model('components', 'Technology')
    Technology.objects.filter(name__in=DEFAULT_TECHNOLOGIES, components__isnull=True).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('components', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed_technologies, reverse_seed),
    ]
