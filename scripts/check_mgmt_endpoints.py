"""Hit every gateway management endpoint and print status codes"""
import json
import requests

endpoints = ['/', '/mgmt/commands', '/mgmt/processes']
base_url = "http://127.0.0.1:9300"

for ep in endpoints:
    try:
        r = requests.get(f"{base_url}{ep}", timeout=5)
        print(f"{ep}: {r.status_code}")
        if r.status_code == 200:
            print(json.dumps(r.json(), indent=2))
    except Exception as e:
        print(f"{ep}: ERROR - {e}")
