"""EduPartner - partner directory and student recruitment CRM backend."""
