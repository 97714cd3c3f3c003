import time, random, argparse, json, urllib.parse, urllib.request
def post(api, path, payload, token=None):
    headers = {'Content-Type': 'application/json'}
    if token: headers['Authorization'] = f'Bearer {token}'
    req = urllib.request.Request(api + path, data=json.dumps(payload).encode('utf-8'), headers=headers)
    with urllib.request.urlopen(req, timeout=10) as resp:
        return json.loads(resp.read().decode())
def login(api, email, password):
    query = urllib.parse.urlencode({'email': email, 'password': password})
    req = urllib.request.Request(f"{api}/auth/login?{query}", data=b'', method='POST')
    with urllib.request.urlopen(req, timeout=10) as resp:
        return json.loads(resp.read().decode())['access_token']
def main():
    p = argparse.ArgumentParser()
    p.add_argument('--api', default='http://localhost:3000')
    p.add_argument('--api-key', default='demo-sensor-key')
    p.add_argument('--email', default='operator@example.com')
    p.add_argument('--password', default='operator123')
    p.add_argument('--rate', type=float, default=1.0)
    args = p.parse_args()
    token = login(args.api, args.email, args.password)
    print(f"Streaming to {args.api} with sensor key {args.api_key} every {args.rate}s... CTRL+C to stop")
    while True:
        payload = {"api_key": args.api_key, "ph": random.gauss(7.2, 0.8), "turbidity": abs(random.gauss(3, 6)),
            "temperature": random.gauss(22, 3), "tds": abs(random.gauss(300, 80)),
            "dissolved_oxygen": random.gauss(6.8, 1.2)}
        try:
            result = post(args.api, "/readings/upload", payload, token)
            print("Sent", payload, "->", "alert" if result.get("alert") else "ok")
        except Exception as e: print("Error:", e)
        time.sleep(args.rate)
if __name__ == "__main__": main()
