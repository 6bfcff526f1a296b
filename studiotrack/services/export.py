"""Export service - CSV extract of an hour report."""
import csv
import io


def report_to_csv(report):
    """Render a report built by ``views.build_report`` as CSV text."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(['Date', 'Project', 'Member', 'Role', 'Description', 'Hours'])

    for entry in report['entries']:
        writer.writerow([
            entry['date'],
            entry['project_name'],
            entry.get('user_name'),
            entry['user_role'],
            entry.get('description'),
            entry['hours'],
        ])

    writer.writerow(['', '', '', '', 'Total', report['total_hours']])
    return output.getvalue()
