def test_health(client):
    response = client.get('/health')

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_index_without_search_shows_hint(client):
    response = client.get('/')
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert "Find Available Apartments" in html
    assert "Use the form above to search for available apartments." in html
    assert "Search complete!" not in html


def test_search_renders_results(client):
    response = client.get('/?location=kadri&date=2025-04-15&guest_count=2')
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert "Search complete! Showing available apartments for 2 guests." in html
    assert "Showing availability from Apr 13 to Apr 17" in html
    assert "Flat 101" in html
    assert "Flat 201" in html
    assert "Apr 15 (Tue)" in html
    assert "Apr 17 (Thu)" in html
    assert "No Availability" not in html


def test_search_all_locations_labels_each_flat(client):
    response = client.get('/?location=all&date=2025-04-15&guest_count=1')
    html = response.get_data(as_text=True)

    assert "Flat 101 (Kadri)" in html
    assert "Flat 101 (Bejai)" in html
    assert "Flat 202 (Bejai)" in html


def test_search_without_matches(client):
    response = client.get('/?location=bejai&date=2025-04-25&guest_count=1')
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert "No Availability" in html
    assert "Reduce the number of guests" in html


def test_invalid_form_shows_inline_errors(client):
    response = client.get('/?location=kadri&date=&guest_count=11')
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert "Please select a date." in html
    assert "Maximum 10 guests allowed." in html
    assert "Search complete!" not in html


def test_api_availability(client):
    response = client.post('/api/availability', json={
        'location': 'all', 'date': '2025-04-15', 'guest_count': 1, 'flexibility_days': 1,
    })
    data = response.get_json()

    assert response.status_code == 200
    assert data['success'] is True
    assert data['has_availability'] is True
    assert [d['date'] for d in data['days']] == ['2025-04-14', '2025-04-15', '2025-04-16']
    assert data['days'][1] == {
        'date': '2025-04-15',
        'day': 'Tue',
        'available_flats': ['kadri-101', 'kadri-201', 'bejai-101', 'bejai-202'],
    }


def test_api_defaults_to_two_days_of_flexibility(client):
    response = client.post('/api/availability', json={'location': 'kadri', 'date': '2025-05-20', 'guest_count': 4})
    data = response.get_json()

    assert data['flexibility_days'] == 2
    assert len(data['days']) == 5
    assert data['has_availability'] is False


def test_api_validation_errors(client):
    response = client.post('/api/availability', json={
        'location': 'kadri', 'date': '2025-04-15', 'guest_count': 0, 'flexibility_days': 30,
    })
    data = response.get_json()

    assert response.status_code == 400
    assert data['success'] is False
    assert set(data['errors']) == {'guest_count', 'flexibility_days'}


def test_api_requires_json(client):
    response = client.post('/api/availability', data='location=kadri')

    assert response.status_code == 400
    assert response.get_json()['success'] is False


def test_api_flats(client):
    response = client.get('/api/flats?location=bejai')
    data = response.get_json()

    assert response.status_code == 200
    assert [f['id'] for f in data['flats']] == ['101', '102', '201', '202', '302']
    assert all(f['location'] == 'bejai' for f in data['flats'])

    assert len(client.get('/api/flats').get_json()['flats']) == 10
    assert client.get('/api/flats?location=nowhere').status_code == 400


def test_search_far_outside_the_calendar_is_an_inline_error(client):
    for value in ('0001-01-01', '9999-12-31'):
        response = client.get(f'/?location=kadri&date={value}&guest_count=1')
        html = response.get_data(as_text=True)

        assert response.status_code == 200
        assert "Please enter a valid date." in html
        assert "Search complete!" not in html


def test_api_rejects_dates_far_outside_the_calendar(client):
    response = client.post('/api/availability', json={'date': '0001-01-01', 'guest_count': 1})

    assert response.status_code == 400
    assert response.get_json()['errors'] == {'date': "Please enter a valid date."}


def test_api_reports_unexpected_failures(broken_client):
    response = broken_client.post('/api/availability', json={
        'location': 'kadri', 'date': '2025-04-15', 'guest_count': 1,
    })
    data = response.get_json()

    assert response.status_code == 500
    assert data['success'] is False
    assert data['message'] == "Server error: dataset unavailable"
