from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ContactSubmission',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.TextField(help_text='Name of the sender')),
                ('email', models.CharField(help_text='Normalized email address of the sender', max_length=254)),
                ('message', models.TextField(help_text='The message body')),
                ('status', models.CharField(choices=[('new', 'New'), ('read', 'Read'), ('replied', 'Replied'), ('archived', 'Archived')], default='new', help_text='Current handling status of the submission', max_length=20)),
                ('ip_address', models.CharField(blank=True, help_text='IP address of the submitter', max_length=64, null=True)),
                ('user_agent', models.TextField(blank=True, help_text='Browser user agent of the submitter', null=True)),
                ('timestamp', models.DateTimeField(auto_now_add=True, db_index=True, help_text='When the submission was stored')),
            ],
            options={
                'verbose_name': 'Contact Submission',
                'verbose_name_plural': 'Contact Submissions',
                'db_table': 'contact_submissions',
                'ordering': ['-timestamp', '-id'],
                'indexes': [models.Index(fields=['status', 'timestamp'], name='contact_sub_status_idx')],
            },
        ),
    ]
