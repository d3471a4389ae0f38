"""OpenSearch index mapping for customer documents."""


def get_customer_mapping() -> dict:
    """Get the index mapping for imported customers."""
    keyword = {"type": "keyword"}
    return {
        "settings": {
            "index": {
                "number_of_shards": 1,
                "number_of_replicas": 0,
            }
        },
        "mappings": {
            "properties": {
                "number": {"type": "long"},
                "location_name": {
                    "type": "text",
                    "fields": {"keyword": keyword},
                },
                "date": {"type": "date"},
                "login_hour": keyword,
                "user_name": {
                    "type": "text",
                    "fields": {"keyword": keyword},
                },
                "birth_year": {"type": "integer"},
                "actual_age": {"type": "integer"},
                "gender": keyword,
                "email": keyword,
                "phone_number": keyword,
                "device_brand": keyword,
                "digital_interest": keyword,
                "location_type": keyword,
                "login_datetime": {"type": "date"},
                "created_at": {"type": "date"},
                "updated_at": {"type": "date"},
            }
        },
    }
