def user_json(user_id, name, follows=(), location=None, pic_url=None):
    parts = [f'"id_str" : "{user_id}"', f'"name" : "{name}"']
    if location is not None:
        parts.append(f'"location" : "{location}"')
    if pic_url is not None:
        parts.append(f'"pic_url" : "{pic_url}"')
    parts.append('"follows" : [' + ",".join(f'"{f}"' for f in follows) + "]")
    return "\t{\n\t\t" + ",\n\t\t".join(parts) + "\n\t}"


def users_json(*users):
    return "[\n" + ",\n".join(users) + "\n]\n"
