import json, os
from datetime import datetime
from storefront.config import ORDER_LOG_FILE
LOG_FILE = ORDER_LOG_FILE
def log_order(session_id, cart, status, detail=None):
    path = LOG_FILE
    os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
    record = {'timestamp': datetime.now().isoformat(), 'session_id': session_id, 'status': status, 'detail': detail, 'items': [{'identity_key': l.identity_key, 'quantity': l.quantity, 'unit_price': str(l.price.amount)} for l in cart]}
    if not os.path.exists(path):
        with open(path, 'w', encoding='utf-8') as f:
            json.dump([record], f, ensure_ascii=False, indent=2)
    else:
        with open(path, 'r+', encoding='utf-8') as f:
            try:
                data = json.load(f)
            except ValueError:
                data = []
            if not isinstance(data, list):
                data = []
            data.append(record)
            f.seek(0)
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.truncate()
