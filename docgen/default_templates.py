# docgen/default_templates.py
"""Global templates installed by ``manage.py seed_document_templates``."""


def _var(key, label, type='text', source='manual', required=False, **extra):
    definition = {'key': key, 'label': label, 'type': type, 'source': source, 'required': required}
    definition.update(extra)
    return definition


WEB_DEVELOPMENT_PROPOSAL = {
    'name': "Web Development Proposal",
    'description': "Professional proposal template for web development projects",
    'type': 'PROPOSAL',
    'content': """{{time_greeting}} {{client_name}},

Thank you for considering {{business_name}} for your {{project_name}} project.

## Project Overview
{{project_description}}

## Scope of Work
- Custom website design and development
- Responsive design for mobile and desktop
- Content management system integration
- Search engine optimization (SEO) basics
- Cross-browser compatibility testing

## Timeline
- Project Start: {{project_start_date}}
- Estimated Completion: {{project_end_date}}
- Total Duration: {{project_duration}}

## Investment
- Total Project Cost: {{project_cost}}
- Payment Terms: {{payment_terms}}

## Next Steps
Upon your approval, we'll send over the contract and can begin work immediately.

Looking forward to working with you!

Best regards,
{{my_name}}
{{business_name}}
{{my_email}}""",
    'variables': [
        _var('time_greeting', "Time Greeting", source='system'),
        _var('client_name', "Client Name", source='client', required=True),
        _var('business_name', "Business Name", source='user', required=True),
        _var('project_name', "Project Name", source='project', required=True),
        _var('project_description', "Project Description", 'textarea', 'project', True),
        _var('project_start_date', "Project Start Date", 'date', 'project'),
        _var('project_end_date', "Project End Date", 'date', 'project'),
        _var('project_duration', "Project Duration", source='project'),
        _var('project_cost', "Project Cost", 'currency', required=True),
        _var('payment_terms', "Payment Terms", 'select', required=True, options=[
            "50% upfront, 50% on completion",
            "1/3 upfront, 1/3 midway, 1/3 completion",
            "100% upfront",
            "Net 30",
            "Net 15",
            "30 days",
        ]),
        _var('my_name', "Your Name", source='user', required=True),
        _var('my_email', "Your Email", source='user', required=True),
    ],
    'is_default': True,
}

FREELANCE_CONTRACT = {
    'name': "Freelance Development Contract",
    'description': "Professional contract template for freelance development work",
    'type': 'CONTRACT',
    'content': """FREELANCE DEVELOPMENT AGREEMENT

This Agreement is made between {{my_name}} ("Developer") and {{client_name}} ("Client") on {{current_date}}.

## 1. PROJECT DESCRIPTION
Project: {{project_name}}
Description: {{project_description}}

## 2. TIMELINE
- Start Date: {{project_start_date}}
- Completion Date: {{project_end_date}}
- Estimated Duration: {{project_duration}}

## 3. COMPENSATION
- Total Project Fee: {{project_cost}}
- Payment Schedule: {{payment_terms}}
- Late Payment Fee: {{late_fee}}

## 4. SCOPE OF WORK
The Developer agrees to provide the following services:
{{scope_of_work}}

## 5. INTELLECTUAL PROPERTY
Upon full payment, all intellectual property rights will transfer to the Client.

## 6. TERMINATION
Either party may terminate this agreement with written notice.

## 7. LIMITATION OF LIABILITY
Developer's liability is limited to the amount paid for services.

By signing below, both parties agree to the terms of this contract.

Developer: {{my_name}}
Date: _____________

Client: {{client_name}}
Date: _____________""",
    'variables': [
        _var('my_name', "Your Name", source='user', required=True),
        _var('client_name', "Client Name", source='client', required=True),
        _var('current_date', "Current Date", 'date', 'system', True),
        _var('project_name', "Project Name", source='project', required=True),
        _var('project_description', "Project Description", 'textarea', 'project', True),
        _var('project_start_date', "Start Date", 'date', 'project', True),
        _var('project_end_date', "End Date", 'date', 'project', True),
        _var('project_duration', "Duration", source='project'),
        _var('project_cost', "Total Cost", 'currency', required=True),
        _var('payment_terms', "Payment Terms", required=True, defaultValue="50% upfront, 50% on completion"),
        _var('late_fee', "Late Fee", defaultValue="1.5% per month"),
        _var('scope_of_work', "Scope of Work", 'textarea', required=True),
    ],
    'is_default': True,
}

MONTHLY_RETAINER_INVOICE = {
    'name': "Monthly Retainer Invoice",
    'description': "Invoice template for monthly retainer clients",
    'type': 'INVOICE',
    'content': """INVOICE

{{business_name}}
{{my_email}}

Bill To:
{{client_name}}
{{client_company}}
{{client_email}}

Invoice Details:
- Invoice Date: {{current_date}}
- Due Date: {{due_date_30}}
- Invoice #: INV-{{current_year}}-{{invoice_number}}

Services:
{{service_description}}

Period: {{service_period}}
Hours Worked: {{hours_worked}}
Hourly Rate: {{hourly_rate}}

Subtotal: {{subtotal}}
Tax ({{tax_rate}}): {{tax_amount}}
Total: {{total_amount}}

Payment Terms: {{payment_terms}}

Thank you for your business!

{{my_name}}
{{business_name}}""",
    'variables': [
        _var('business_name', "Business Name", source='user', required=True),
        _var('my_email', "Your Email", source='user', required=True),
        _var('my_name', "Your Name", source='user', required=True),
        _var('client_name', "Client Name", source='client', required=True),
        _var('client_company', "Client Company", source='client'),
        _var('client_email', "Client Email", source='client'),
        _var('current_date', "Current Date", 'date', 'system', True),
        _var('due_date_30', "Due Date", 'date', 'system', True),
        _var('current_year', "Current Year", source='system', required=True),
        _var('invoice_number', "Invoice Number", required=True),
        _var('service_description', "Service Description", 'textarea', required=True),
        _var('service_period', "Service Period", required=True),
        _var('hours_worked', "Hours Worked", 'number', required=True),
        _var('hourly_rate', "Hourly Rate", 'currency', required=True),
        _var('subtotal', "Subtotal", 'currency', required=True),
        _var('tax_rate', "Tax Rate", defaultValue="0%"),
        _var('tax_amount', "Tax Amount", 'currency', defaultValue="$0.00"),
        _var('total_amount', "Total Amount", 'currency', required=True),
        _var('payment_terms', "Payment Terms", defaultValue="Net 30"),
    ],
    'is_default': True,
}

PROJECT_COMPLETION_REPORT = {
    'name': "Project Completion Report",
    'description': "Report template for completed projects",
    'type': 'REPORT',
    'content': """PROJECT COMPLETION REPORT

Project: {{project_name}}
Client: {{client_name}}
Completion Date: {{current_date}}

## Project Summary
{{project_description}}

## Deliverables Completed
{{deliverables_list}}

## Timeline
- Start Date: {{project_start_date}}
- End Date: {{project_end_date}}
- Total Duration: {{project_duration}}

## Key Achievements
{{key_achievements}}

## Challenges & Solutions
{{challenges_solutions}}

## Final Outcomes
{{final_outcomes}}

## Recommendations
{{recommendations}}

## Next Steps
{{next_steps}}

Thank you for the opportunity to work on this project!

{{my_name}}
{{business_name}}
{{current_date}}""",
    'variables': [
        _var('project_name', "Project Name", source='project', required=True),
        _var('client_name', "Client Name", source='client', required=True),
        _var('current_date', "Current Date", 'date', 'system', True),
        _var('project_description', "Project Description", 'textarea', 'project', True),
        _var('deliverables_list', "Deliverables Completed", 'textarea', required=True),
        _var('project_start_date', "Start Date", 'date', 'project'),
        _var('project_end_date', "End Date", 'date', 'project'),
        _var('project_duration', "Duration", source='project'),
        _var('key_achievements', "Key Achievements", 'textarea', required=True),
        _var('challenges_solutions', "Challenges & Solutions", 'textarea', required=True),
        _var('final_outcomes', "Final Outcomes", 'textarea', required=True),
        _var('recommendations', "Recommendations", 'textarea'),
        _var('next_steps', "Next Steps", 'textarea'),
        _var('my_name', "Your Name", source='user', required=True),
        _var('business_name', "Business Name", source='user', required=True),
    ],
    'is_default': True,
}

DEFAULT_TEMPLATES = [
    WEB_DEVELOPMENT_PROPOSAL,
    FREELANCE_CONTRACT,
    MONTHLY_RETAINER_INVOICE,
    PROJECT_COMPLETION_REPORT,
]
