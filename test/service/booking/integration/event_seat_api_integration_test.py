def test_seat_map_of_event_without_layout(client, seed_event, load_event):
    event_id = seed_event(total_seats=120, available_seats=118)

    response = client.get(f'/api/events/{event_id}/seats')

    assert response.status_code == 200
    data = response.json()['data']
    assert data['availableSeats'] == 118
    assert data['totalSeats'] == 120
    assert data['seatLayout']['rows'] == 10
    assert data['seatLayout']['seatsPerRow'] == 12
    assert data['seatLayout']['bookedSeats'] == []
    assert load_event(event_id).seat_layout['rows'] == 10


def test_seat_map_drops_cancelled_seats(client, auth_headers, seed_user, seed_event):
    user = seed_user()
    headers = auth_headers(user)
    event_id = seed_event()
    keep = client.post(
        '/api/bookings',
        json={
            'eventId': event_id,
            'numberOfTickets': 1,
            'selectedSeats': [{'row': 'A', 'seatNumber': 1}],
        },
        headers=headers,
    )
    drop = client.post(
        '/api/bookings',
        json={
            'eventId': event_id,
            'numberOfTickets': 1,
            'selectedSeats': [{'row': 'A', 'seatNumber': 2}],
        },
        headers=headers,
    )
    assert keep.status_code == drop.status_code == 201
    client.put(f'/api/bookings/{drop.json()["data"]["id"]}/cancel', headers=headers)

    response = client.get(f'/api/events/{event_id}/seats')

    assert response.json()['data']['seatLayout']['bookedSeats'] == [{'row': 'A', 'seat': 1}]


def test_seat_map_of_unknown_event(client):
    response = client.get('/api/events/01936d8f-5e73-7c4e-a9c5-123456789abc/seats')
    assert response.status_code == 404
    assert response.json() == {'success': False, 'message': 'Event not found'}


def test_health_and_metrics(client):
    health = client.get('/health')
    metrics = client.get('/metrics')

    assert health.status_code == 200
    assert health.json()['status'] == 'healthy'
    assert metrics.status_code == 200
    assert 'booking_requests_total' in metrics.text
